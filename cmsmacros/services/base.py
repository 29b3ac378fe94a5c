#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
RepositoryService — shared plumbing for services backed by repositories:
the unit-of-work provider, the repository factory, event messages and the
audit trail.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from cmsmacros.core.events import EventMessagesFactory
from cmsmacros.models import AuditItem, AuditType
from cmsmacros.persistence import RepositoryFactory, UnitOfWorkProvider

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class RepositoryService:

    def __init__(
        self,
        provider: UnitOfWorkProvider,
        repository_factory: RepositoryFactory | None = None,
        event_messages_factory: EventMessagesFactory | None = None,
    ) -> None:
        self.uow_provider = provider
        self.repository_factory = repository_factory or RepositoryFactory()
        self.event_messages_factory = event_messages_factory or EventMessagesFactory()

    # ----------------------------------------------------------------- audit

    async def audit(self, audit_type: AuditType, message: str, user_id: int, object_id: int) -> None:
        """Write one audit row in its own transaction."""
        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_audit_repository(uow)
            await repo.add_or_update(AuditItem(
                object_id=object_id,
                comment=message,
                audit_type=audit_type,
                user_id=user_id,
            ))
            await uow.commit()
        logger.debug("Audit %s by user %s: %s", audit_type.value, user_id, message)

    async def get_audit_entries(
        self,
        limit: int = 100,
        audit_type: AuditType | None = None,
        user_id: int | None = None,
    ) -> list[AuditItem]:
        """Most recent audit rows first, optionally filtered by type and/or user."""
        filters: dict = {}
        if audit_type is not None:
            filters["audit_type"] = audit_type
        if user_id is not None:
            filters["user_id"] = user_id
        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_audit_repository(uow)
            return await repo.get_recent(limit, **filters)


# -----------------------------------------------------------------------------
