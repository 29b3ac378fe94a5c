#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
FastAPI dependencies shared by the routers.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from cmsmacros.core.database import get_session_factory
from cmsmacros.persistence import UnitOfWorkProvider
from cmsmacros.services import MacroService


# -----------------------------------------------------------------------------

def get_macro_service() -> MacroService:
    """Build a MacroService on the application's session factory."""
    return MacroService(UnitOfWorkProvider(get_session_factory()))


# -----------------------------------------------------------------------------
