"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import BackendError
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_staff_role_repo import (
    SQLAlchemyStaffRoleRepository,
)
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository

logger = structlog.get_logger()

T = TypeVar("T")

# Driver-level failures (refused connections, DNS) are not always wrapped by SQLAlchemy
_BACKEND_FAILURES = (SQLAlchemyError, OSError)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Every failure of the underlying backend, whether on entering, inside the
    block, or on commit, is rolled back and re-raised as ``BackendError``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        isolation_level: Optional[str] = None,
    ) -> None:
        self._session_factory = session_factory
        self._isolation_level = isolation_level
        self._session: Optional[AsyncSession] = None

    @property
    def isolation_level(self) -> Optional[str]:
        return self._isolation_level

    @property
    def users(self) -> SQLAlchemyUserRepository:
        """Get user repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyUserRepository(self._session)

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyProfileRepository(self._session)

    @property
    def staff_roles(self) -> SQLAlchemyStaffRoleRepository:
        """Get staff role repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyStaffRoleRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            try:
                await self._session.commit()
            except _BACKEND_FAILURES as e:
                await self._safe_rollback()
                raise BackendError(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def within_transaction(self, work: Callable[["SQLAlchemyUnitOfWork"], Awaitable[T]]) -> T:
        """Run ``work`` and commit iff it returns without raising."""
        try:
            result = await work(self)
        except BaseException:
            await self._safe_rollback()
            raise
        await self.commit()
        return result

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        if self._isolation_level:
            # Pins the connection now, so pool exhaustion surfaces here
            try:
                await self._session.connection(
                    execution_options={"isolation_level": self._isolation_level}
                )
            except _BACKEND_FAILURES as e:
                await self._session.close()
                self._session = None
                raise BackendError(f"Could not acquire a database connection: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if not self._session:
            return
        try:
            if exc_type:
                await self._safe_rollback()
        finally:
            await self._session.close()
            self._session = None

        if isinstance(exc_val, _BACKEND_FAILURES):
            logger.error("database_operation_failed", error=str(exc_val), error_type=type(exc_val).__name__)
            raise BackendError(str(exc_val)) from exc_val

    async def _safe_rollback(self) -> None:
        if not self._session:
            return
        try:
            await self._session.rollback()
        except _BACKEND_FAILURES:
            logger.warning("database_rollback_failed", exc_info=True)
