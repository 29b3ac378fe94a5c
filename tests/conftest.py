#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
Every test gets its own in-memory SQLite database (aiosqlite + StaticPool,
so all sessions share one connection), a MacroService bound to it, and an
HTTP client whose service dependency is overridden to that same service.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

# ── Env vars must be set before importing cmsmacros modules ──────────────────
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY",   "test-secret-key-not-for-production")
os.environ.setdefault("ENVIRONMENT",  "testing")

import cmsmacros.models  # noqa: E402,F401 — register models
from cmsmacros.core.database import Base, build_engine, build_session_factory  # noqa: E402
from cmsmacros.core.security import create_access_token  # noqa: E402
from cmsmacros.main import create_app  # noqa: E402
from cmsmacros.persistence import UnitOfWorkProvider  # noqa: E402
from cmsmacros.routes.deps import get_macro_service  # noqa: E402
from cmsmacros.services import MacroService  # noqa: E402

_TEST_URL = "sqlite+aiosqlite:///:memory:"


# ── Fresh database per test ──────────────────────────────────────────────────
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = build_engine(_TEST_URL)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
def provider(session_factory) -> UnitOfWorkProvider:
    return UnitOfWorkProvider(session_factory)


@pytest.fixture
def service(provider: UnitOfWorkProvider) -> MacroService:
    return MacroService(provider)


# ── Macro events are class-level; never leak handlers between tests ─────────
@pytest.fixture(autouse=True)
def reset_macro_events():
    yield
    for event in (MacroService.saving, MacroService.saved,
                  MacroService.deleting, MacroService.deleted):
        event.clear()


# ── HTTP client bound to the test's service ──────────────────────────────────
@pytest_asyncio.fixture
async def client(service: MacroService) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    app.dependency_overrides[get_macro_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


# ── Helpers ──────────────────────────────────────────────────────────────────

def auth_headers(user_id: int = 1) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


# -----------------------------------------------------------------------------
