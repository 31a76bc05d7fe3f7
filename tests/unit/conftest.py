"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest


class FakeUnitOfWork:
    """Fake Unit of Work with the three repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.staff_roles = AsyncMock()
        self.committed = False
        self.rolled_back = False
        self.serializable_requests: list[bool] = []

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def within_transaction(self, work: Any) -> Any:
        try:
            result = await work(self)
        except BaseException:
            await self.rollback()
            raise
        await self.commit()
        return result

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork):
    """Factory that always hands out the same fake and records isolation requests."""

    def factory(*, serializable: bool = False) -> FakeUnitOfWork:
        uow.serializable_requests.append(serializable)
        return uow

    return factory


@pytest.fixture
def discord_user_id() -> int:
    return 80351110224678912
