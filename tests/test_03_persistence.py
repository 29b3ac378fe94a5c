#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Unit of work and repository behaviour
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from cmsmacros.models import AuditItem, AuditType, Macro, MacroProperty
from cmsmacros.persistence import AuditRepository, MacroRepository, RepositoryFactory


# -----------------------------------------------------------------------------

pytestmark = pytest.mark.asyncio


async def _insert(provider, *aliases: str) -> list[Macro]:
    out = []
    async with provider.get_unit_of_work() as uow:
        repo = MacroRepository(uow)
        for alias in aliases:
            out.append(await repo.add_or_update(Macro(alias=alias, name=alias.title())))
        await uow.commit()
    return out


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. Unit of work
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestUnitOfWork:
    async def test_uncommitted_changes_are_discarded(self, provider):
        async with provider.get_unit_of_work() as uow:
            await MacroRepository(uow).add_or_update(Macro(alias="ghost"))

        async with provider.get_unit_of_work() as uow:
            assert await MacroRepository(uow).count() == 0

    async def test_exception_rolls_back(self, provider):
        with pytest.raises(RuntimeError):
            async with provider.get_unit_of_work() as uow:
                await MacroRepository(uow).add_or_update(Macro(alias="doomed"))
                raise RuntimeError("abort")

        async with provider.get_unit_of_work() as uow:
            assert await MacroRepository(uow).count() == 0

    async def test_commit_persists(self, provider):
        await _insert(provider, "kept")
        async with provider.get_unit_of_work() as uow:
            assert await MacroRepository(uow).count() == 1

    async def test_session_outside_context_raises(self, provider):
        uow = provider.get_unit_of_work()
        assert uow.is_active is False
        with pytest.raises(RuntimeError):
            uow.session

    async def test_each_call_is_a_new_unit(self, provider):
        assert provider.get_unit_of_work() is not provider.get_unit_of_work()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. Repository
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestRepository:
    async def test_add_assigns_id_and_defaults(self, provider):
        [macro] = await _insert(provider, "fresh")
        assert macro.id is not None
        assert macro.key is not None
        assert macro.created_at is not None
        assert macro.properties == []

    async def test_get_all_empty_ids_returns_everything(self, provider):
        await _insert(provider, "a", "b", "c")
        async with provider.get_unit_of_work() as uow:
            found = await MacroRepository(uow).get_all()
        assert [m.alias for m in found] == ["a", "b", "c"]

    async def test_get_all_filters_by_ids(self, provider):
        a, _b, c = await _insert(provider, "a", "b", "c")
        async with provider.get_unit_of_work() as uow:
            found = await MacroRepository(uow).get_all(c.id, a.id)
        assert [m.alias for m in found] == ["a", "c"]

    async def test_get_by_query(self, provider):
        await _insert(provider, "a", "b")
        async with provider.get_unit_of_work() as uow:
            found = await MacroRepository(uow).get_by_query(Macro.alias == "b")
        assert len(found) == 1
        assert found[0].alias == "b"

    async def test_exists_and_count(self, provider):
        [a] = await _insert(provider, "a")
        async with provider.get_unit_of_work() as uow:
            repo = MacroRepository(uow)
            assert await repo.exists(a.id) is True
            assert await repo.exists(a.id + 100) is False
            assert await repo.count(Macro.alias == "a") == 1

    async def test_merge_updates_detached_entity(self, provider):
        [a] = await _insert(provider, "a")
        a.name = "Renamed"
        a.properties.append(MacroProperty(alias="title", name="Title", editor_alias="textbox"))

        async with provider.get_unit_of_work() as uow:
            await MacroRepository(uow).add_or_update(a)
            await uow.commit()

        async with provider.get_unit_of_work() as uow:
            loaded = await MacroRepository(uow).get(a.id)
        assert loaded.name == "Renamed"
        assert [p.alias for p in loaded.properties] == ["title"]

    async def test_delete_cascades_to_properties(self, provider):
        async with provider.get_unit_of_work() as uow:
            repo = MacroRepository(uow)
            macro = await repo.add_or_update(Macro(
                alias="withprops",
                properties=[MacroProperty(alias="p1"), MacroProperty(alias="p2", sort_order=1)],
            ))
            await uow.commit()

        async with provider.get_unit_of_work() as uow:
            await MacroRepository(uow).delete(macro)
            await uow.commit()

        async with provider.get_unit_of_work() as uow:
            from sqlalchemy import func, select
            remaining = (await uow.session.execute(
                select(func.count()).select_from(MacroProperty)
            )).scalar_one()
            assert remaining == 0
            assert await MacroRepository(uow).get(macro.id) is None

    async def test_delete_missing_is_noop(self, provider):
        async with provider.get_unit_of_work() as uow:
            await MacroRepository(uow).delete(Macro(id=12345, alias="nope"))
            await MacroRepository(uow).delete(Macro(alias="transient"))
            await uow.commit()

    async def test_audit_repository_recent_first_with_filters(self, provider):
        async with provider.get_unit_of_work() as uow:
            repo = AuditRepository(uow)
            await repo.add_or_update(AuditItem(comment="one", audit_type=AuditType.SAVE, user_id=1))
            await repo.add_or_update(AuditItem(comment="two", audit_type=AuditType.DELETE, user_id=2))
            await repo.add_or_update(AuditItem(comment="three", audit_type=AuditType.SAVE, user_id=2))
            await uow.commit()

        async with provider.get_unit_of_work() as uow:
            repo = AuditRepository(uow)
            assert [a.comment for a in await repo.get_recent()] == ["three", "two", "one"]
            assert [a.comment for a in await repo.get_recent(audit_type=AuditType.SAVE)] == ["three", "one"]
            assert [a.comment for a in await repo.get_recent(user_id=2, limit=1)] == ["three"]

    async def test_factory_binds_repositories_to_uow(self, provider):
        factory = RepositoryFactory()
        async with provider.get_unit_of_work() as uow:
            assert isinstance(factory.create_macro_repository(uow), MacroRepository)
            assert factory.create_audit_repository(uow).uow is uow
