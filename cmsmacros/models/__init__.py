#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------

"""ORM models package — import all to register with Base.metadata."""

from .macro import Macro, MacroProperty, MacroTypes
from .audit import AuditItem, AuditType

__all__ = ["Macro", "MacroProperty", "MacroTypes", "AuditItem", "AuditType"]
