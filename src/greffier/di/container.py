"""
Greffier dependency container.

The container owns the process-wide Database. Repositories and services
are cheap and hold a session, so they are built per request.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.application.services.wallet_binder import WalletBinder
from greffier.application.use_cases.get_user_profile import GetUserProfile
from greffier.config.settings import get_settings
from greffier.domain.repositories.i_user_repository import IUserRepository
from greffier.infrastructure.persistence.database import Database
from greffier.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)


class DIContainer:
    """Process-scoped Database plus request-scoped factories."""

    def __init__(self, database: Optional[Database] = None):
        self._database = database

    @property
    def database(self) -> Database:
        """Database built from settings on first access."""
        if self._database is None:
            settings = get_settings()
            self._database = Database(
                database_url=settings.DATABASE_URL,
                echo=settings.DATABASE_ECHO,
                pool_size=settings.DATABASE_POOL_SIZE,
                statement_timeout=settings.DATABASE_TIMEOUT,
            )
        return self._database

    async def initialize(self) -> None:
        await self.database.connect()

    async def shutdown(self) -> None:
        if self._database is not None:
            await self._database.disconnect()

    # ----------------------------------------------------------------
    # Request-scoped builders
    # ----------------------------------------------------------------

    def get_user_repository(self, session: AsyncSession) -> IUserRepository:
        return UserRepository(session)

    def get_record_reconciler(self, session: AsyncSession) -> RecordReconciler:
        return RecordReconciler(user_repository=self.get_user_repository(session))

    def get_wallet_binder(self, session: AsyncSession) -> WalletBinder:
        """Binder and its reconciler share one repository (one session)."""
        repository = self.get_user_repository(session)
        return WalletBinder(
            user_repository=repository,
            record_reconciler=RecordReconciler(user_repository=repository),
        )

    def get_get_user_profile(self, session: AsyncSession) -> GetUserProfile:
        return GetUserProfile(record_reconciler=self.get_record_reconciler(session))


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Process-wide container."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Swap the process-wide container (tests); None resets it."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    await get_container().shutdown()
