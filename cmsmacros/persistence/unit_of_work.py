#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Unit of work
============
A UnitOfWork owns exactly one AsyncSession for the duration of an
``async with`` block.  Nothing is written unless ``commit()`` is called.
An exception rolls back; otherwise the session is closed, which discards
uncommitted work but leaves already-loaded objects readable once detached.

    async with provider.get_unit_of_work() as uow:
        repo = MacroRepository(uow)
        await repo.add_or_update(macro)
        await uow.commit()
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class UnitOfWork:

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    # ------------------------------------------------------------- lifecycle

    async def __aenter__(self) -> "UnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already active")
        self._session = self._session_factory()
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        session = self._session
        if session is None:
            return
        try:
            if exc_type is not None:
                await session.rollback()
            elif not self._committed and (session.new or session.dirty or session.deleted):
                logger.debug("Discarding uncommitted changes")
        finally:
            await session.close()
            self._session = None

    # ------------------------------------------------------------ operations

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with'")
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    async def commit(self) -> None:
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        await self.session.rollback()
        self._committed = False


# -----------------------------------------------------------------------------

class UnitOfWorkProvider:
    """Hands out a fresh UnitOfWork per call, all bound to one session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def get_unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self._session_factory)


# -----------------------------------------------------------------------------
