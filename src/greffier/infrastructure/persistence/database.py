"""
Database engine and session lifecycle.

One ``Database`` per process, owned by the DI container. Engine options
depend on the driver: asyncpg gets a pool and a per-statement timeout,
SQLite (local runs, tests) gets a busy timeout.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import MetaData, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from greffier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself; pysqlite's implicit one breaks SAVEPOINT."""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """
    Async engine plus session factory.

    Sessions commit when the block exits cleanly and roll back otherwise;
    repositories never commit on their own.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        statement_timeout: float = 10.0,
    ):
        """
        Args:
            database_url: SQLAlchemy async URL (postgresql+asyncpg, sqlite+aiosqlite)
            echo: Log emitted SQL
            pool_size: Pooled connections (PostgreSQL only)
            statement_timeout: Seconds before a statement is abandoned
        """
        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.statement_timeout = statement_timeout
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None

    @property
    def backend(self) -> str:
        """Dialect name of the configured URL."""
        return make_url(self.database_url).get_backend_name()

    def _engine_options(self) -> Dict[str, Any]:
        if self.backend == "sqlite":
            return {"connect_args": {"timeout": self.statement_timeout}}

        return {
            "pool_size": self.pool_size,
            "max_overflow": self.pool_size // 2,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "connect_args": {
                "command_timeout": self.statement_timeout,
                "server_settings": {"application_name": "greffier"},
            },
        }

    async def connect(self) -> None:
        """Create the engine and session factory (idempotent)."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self.database_url, echo=self.echo, **self._engine_options()
        )
        if self.backend == "sqlite":
            _enable_sqlite_savepoints(self._engine)

        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info(f"Database engine created ({self.backend})")

    @property
    def engine(self) -> AsyncEngine:
        """Underlying engine; requires ``connect()``."""
        if self._engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    async def disconnect(self) -> None:
        """Dispose of pooled connections."""
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Unit-of-work session.

        Usage:
            async with database.session() as session:
                repo = UserRepository(session)
        """
        if self._session_factory is None:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self, metadata: MetaData, drop_first: bool = False) -> None:
        """Create (optionally after dropping) all tables in ``metadata``."""
        async with self.engine.begin() as conn:
            if drop_first:
                await conn.run_sync(metadata.drop_all)
            await conn.run_sync(metadata.create_all)

    async def health_check(self) -> bool:
        """True if a trivial query succeeds."""
        if self._engine is None:
            return False

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning(f"Database health check failed: {type(e).__name__}")
            return False
        return True
