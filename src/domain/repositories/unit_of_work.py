"""Unit of Work protocol."""

from typing import Awaitable, Callable, Protocol, TypeVar

from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.staff_role_repository import IStaffRoleRepository
from domain.repositories.user_repository import IUserRepository

T = TypeVar("T")


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    users: IUserRepository
    profiles: IProfileRepository
    staff_roles: IStaffRoleRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def within_transaction(self, work: Callable[["IUnitOfWork"], Awaitable[T]]) -> T:
        """Run ``work`` and commit iff it returns without raising."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...


class UnitOfWorkFactory(Protocol):
    """Creates a fresh unit of work, optionally pinned to strict isolation."""

    def __call__(self, *, serializable: bool = False) -> IUnitOfWork:
        ...
