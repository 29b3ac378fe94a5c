#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Macro service
=============
Read, save and delete macros.

Every read opens its own unit of work and returns detached objects.  Saves
and deletes follow the same sequence:

    1. raise the cancellable "-ing" event; stop if a handler cancelled
    2. mutate + commit in one unit of work
    3. raise the "-ed" event
    4. write the audit row in a second unit of work

Step 4 is not atomic with step 2: a failure between them leaves the change
committed but unaudited.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from cmsmacros.core.config import get_settings
from cmsmacros.core.events import EventMessages, TypedEvent, delete_args, save_args
from cmsmacros.models import AuditType, Macro, MacroTypes

from .base import RepositoryService

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class MacroServiceError(Exception):
    pass


class MacroNotFound(MacroServiceError):
    pass


class DuplicateMacroAlias(MacroServiceError):
    pass


# -----------------------------------------------------------------------------

class MacroService(RepositoryService):

    # Shared by every MacroService instance.
    saving = TypedEvent("Macro.Saving")
    saved = TypedEvent("Macro.Saved")
    deleting = TypedEvent("Macro.Deleting")
    deleted = TypedEvent("Macro.Deleted")

    # ---------------------------------------------------------- classification

    @staticmethod
    def get_macro_type(macro: Macro) -> MacroTypes:
        if macro.xslt_path:
            return MacroTypes.XSLT
        if macro.script_path:
            return MacroTypes.PARTIAL_VIEW
        if macro.control_type and ".ascx" in macro.control_type.lower():
            return MacroTypes.USER_CONTROL
        return MacroTypes.UNKNOWN

    # ------------------------------------------------------------------ reads

    async def get_by_alias(self, alias: str) -> Macro | None:
        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_macro_repository(uow)
            found = await repo.get_by_query(Macro.alias == alias)
        return found[0] if found else None

    async def get_all(self, *ids: int) -> list[Macro]:
        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_macro_repository(uow)
            return await repo.get_all(*ids)

    async def get_by_id(self, macro_id: int) -> Macro | None:
        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_macro_repository(uow)
            return await repo.get(macro_id)

    async def require_by_id(self, macro_id: int) -> Macro:
        macro = await self.get_by_id(macro_id)
        if macro is None:
            raise MacroNotFound(f"Macro id={macro_id} not found")
        return macro

    async def ensure_alias_available(self, alias: str, exclude_id: int | None = None) -> None:
        existing = await self.get_by_alias(alias)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateMacroAlias(f"Macro alias '{alias}' is already in use")

    # ----------------------------------------------------------------- writes

    async def delete(self, macro: Macro, user_id: int = 0, messages: EventMessages | None = None) -> bool:
        """Delete *macro*.  Returns False when a ``deleting`` handler cancelled.

        Pass *messages* to collect whatever the event handlers report.
        """
        if messages is None:
            messages = self.event_messages_factory.get()
        if await self.deleting.is_raised_event_cancelled(delete_args(macro, messages=messages), self):
            logger.info("Delete of macro %r cancelled by event handler", macro.alias)
            return False

        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_macro_repository(uow)
            await repo.delete(macro)
            await uow.commit()

        await self.deleted.raise_event(delete_args(macro, can_cancel=False, messages=messages), self)
        logger.info("Deleted macro %r (id=%s) for user %s", macro.alias, macro.id, user_id)

        await self.audit(
            AuditType.DELETE, "Delete Macro performed by user", user_id,
            get_settings().audit_default_object_id,
        )
        return True

    async def save(self, macro: Macro, user_id: int = 0, messages: EventMessages | None = None) -> bool:
        """Insert or update *macro*.  Returns False when a ``saving`` handler cancelled."""
        if messages is None:
            messages = self.event_messages_factory.get()
        if await self.saving.is_raised_event_cancelled(save_args(macro, messages=messages), self):
            logger.info("Save of macro %r cancelled by event handler", macro.alias)
            return False

        async with self.uow_provider.get_unit_of_work() as uow:
            repo = self.repository_factory.create_macro_repository(uow)
            await repo.add_or_update(macro)
            await uow.commit()

        await self.saved.raise_event(save_args(macro, can_cancel=False, messages=messages), self)
        logger.info("Saved macro %r (id=%s) for user %s", macro.alias, macro.id, user_id)

        await self.audit(
            AuditType.SAVE, "Save Macro performed by user", user_id,
            get_settings().audit_default_object_id,
        )
        return True


# -----------------------------------------------------------------------------
