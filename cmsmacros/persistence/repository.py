#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Repositories
============
Thin, generic data access over a UnitOfWork.  Services never touch the
session directly; they ask a repository, and the unit of work decides
whether anything sticks.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select

from cmsmacros.core.database import Base
from cmsmacros.models import AuditItem, Macro

from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


# -----------------------------------------------------------------------------

class Repository(Generic[T]):

    model: type[T]

    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    # ---------------------------------------------------------------- reads

    async def get(self, entity_id: int) -> T | None:
        return await self.uow.session.get(self.model, entity_id)

    async def get_all(self, *ids: int) -> list[T]:
        """Return entities whose id is in *ids*, or every entity when none are given."""
        stmt = select(self.model).order_by(self.model.id)
        if ids:
            stmt = stmt.where(self.model.id.in_(ids))
        result = await self.uow.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_query(self, *criteria: ColumnElement[bool]) -> list[T]:
        stmt = select(self.model).where(*criteria).order_by(self.model.id)
        result = await self.uow.session.execute(stmt)
        return list(result.scalars().all())

    async def exists(self, entity_id: int) -> bool:
        return await self.count(self.model.id == entity_id) > 0

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.uow.session.execute(stmt)
        return result.scalar_one()

    # --------------------------------------------------------------- writes

    async def add_or_update(self, entity: T) -> T:
        """Insert *entity* when it has no id yet, otherwise merge it in.

        Returns the instance attached to the session; for inserts that is
        *entity* itself with its id populated.
        """
        session = self.uow.session
        self._before_persist(entity)
        if entity.id is None:
            session.add(entity)
            attached = entity
        else:
            attached = await session.merge(entity)
        await session.flush()
        return attached

    async def delete(self, entity: T) -> None:
        if entity.id is None:
            return
        session = self.uow.session
        persistent = await session.get(self.model, entity.id)
        if persistent is None:
            logger.debug("%s id=%s already gone; nothing to delete", self.model.__name__, entity.id)
            return
        await session.delete(persistent)
        await session.flush()

    # ---------------------------------------------------------------- hooks

    def _before_persist(self, entity: T) -> None:
        pass


# -----------------------------------------------------------------------------

class MacroRepository(Repository[Macro]):
    model = Macro

    def _before_persist(self, entity: Macro) -> None:
        entity.updated_at = datetime.now(timezone.utc)


# -----------------------------------------------------------------------------

class AuditRepository(Repository[AuditItem]):
    model = AuditItem

    async def get_recent(self, limit: int = 100, **filters: Any) -> list[AuditItem]:
        stmt = select(AuditItem).filter_by(**filters).order_by(AuditItem.id.desc()).limit(limit)
        result = await self.uow.session.execute(stmt)
        return list(result.scalars().all())


# -----------------------------------------------------------------------------
