"""Pytest configuration and fixtures."""

import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.database.dialects import SqliteBackend
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def backend() -> AsyncGenerator[SqliteBackend, None]:
    """A fresh in-memory database per test, with every table created."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    backend = SqliteBackend(engine)
    yield backend
    await backend.dispose()


@pytest.fixture
def uow_factory(backend: SqliteBackend):
    """Unit of work factory bound to the test database."""
    return backend.unit_of_work


class ScriptedEditorUI:
    """Editor UI that replays a fixed script of choices and form submissions.

    Each ``choose`` and each ``fill`` call consumes the next step: a choice key
    (or ``None`` for a timeout) and a submitted dict (or ``None`` for a
    dismissed form) respectively.
    """

    def __init__(self, *steps):
        self._steps = list(steps)
        self.drafts_seen: list[dict] = []
        self.errors_seen: list[list[str]] = []
        self.defaults_seen: list[tuple[str, dict]] = []

    async def choose(self, draft, errors):
        self.drafts_seen.append(dict(draft.values))
        self.errors_seen.append(list(errors))
        return self._steps.pop(0)

    async def fill(self, group, defaults):
        self.defaults_seen.append((group.key, dict(defaults)))
        return self._steps.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self._steps
