#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Repository factory — the single place services obtain repositories from,
so tests can substitute their own.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from .repository import AuditRepository, MacroRepository
from .unit_of_work import UnitOfWork


# -----------------------------------------------------------------------------

class RepositoryFactory:

    def create_macro_repository(self, uow: UnitOfWork) -> MacroRepository:
        return MacroRepository(uow)

    def create_audit_repository(self, uow: UnitOfWork) -> AuditRepository:
        return AuditRepository(uow)


# -----------------------------------------------------------------------------
