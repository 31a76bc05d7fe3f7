"""Relational backend variants.

Each supported dialect is one ``DatabaseBackend`` subclass. The backend is
picked once at startup from ``Settings.database_dialect``; everything after
that only talks to the shared interface.
"""

from typing import Any, ClassVar

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import DatabaseDialect, Settings
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


class DatabaseBackend:
    """Connection provider for one relational dialect."""

    dialect: ClassVar[DatabaseDialect]
    # Isolation level for operations that maintain the one-active-profile invariant
    strict_isolation_level: ClassVar[str] = "SERIALIZABLE"

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def engine_options(cls, settings: Settings) -> dict[str, Any]:
        """Keyword arguments for ``create_async_engine``."""
        return {
            "pool_size": settings.database_pool_size,
            "max_overflow": 0,
            "pool_timeout": settings.database_pool_timeout,
            "pool_pre_ping": True,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseBackend":
        """Create the engine for this dialect and wrap it."""
        engine = create_async_engine(
            settings.async_database_url,
            echo=settings.debug,
            **cls.engine_options(settings),
        )
        return cls(engine)

    def unit_of_work(self, *, serializable: bool = False) -> SQLAlchemyUnitOfWork:
        """Borrow a pooled connection as a new unit of work."""
        isolation_level = self.strict_isolation_level if serializable else None
        return SQLAlchemyUnitOfWork(self.session_factory, isolation_level=isolation_level)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


class SqliteBackend(DatabaseBackend):
    """SQLite through aiosqlite."""

    dialect = DatabaseDialect.SQLITE

    @classmethod
    def engine_options(cls, settings: Settings) -> dict[str, Any]:
        # SQLAlchemy picks StaticPool for in-memory databases, which takes no sizing args
        if ":memory:" in settings.async_database_url:
            return {}
        return {
            "pool_size": settings.database_pool_size,
            "max_overflow": 0,
            "pool_timeout": settings.database_pool_timeout,
        }


class PostgresBackend(DatabaseBackend):
    """PostgreSQL through asyncpg."""

    dialect = DatabaseDialect.POSTGRES

    @classmethod
    def engine_options(cls, settings: Settings) -> dict[str, Any]:
        options = super().engine_options(settings)
        # asyncpg's prepared statement cache is incompatible with
        # transaction-mode poolers such as Supavisor or PgBouncer.
        if "pooler" in settings.async_database_url:
            options["connect_args"] = {"statement_cache_size": 0}
        return options


class MysqlBackend(DatabaseBackend):
    """MySQL / MariaDB through aiomysql."""

    dialect = DatabaseDialect.MYSQL

    @classmethod
    def engine_options(cls, settings: Settings) -> dict[str, Any]:
        options = super().engine_options(settings)
        # MySQL closes idle connections after wait_timeout (8h by default)
        options["pool_recycle"] = 3600
        return options


_BACKENDS: dict[DatabaseDialect, type[DatabaseBackend]] = {
    backend.dialect: backend for backend in (SqliteBackend, PostgresBackend, MysqlBackend)
}


def get_backend_class(dialect: DatabaseDialect) -> type[DatabaseBackend]:
    """Look up the backend variant for a configured dialect."""
    return _BACKENDS[DatabaseDialect(dialect)]


def create_backend(settings: Settings) -> DatabaseBackend:
    """Create the configured backend."""
    return get_backend_class(settings.database_dialect).from_settings(settings)
