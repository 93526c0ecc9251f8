"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
All dependencies are async-compatible and use proper scoping.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.application.services.wallet_binder import WalletBinder
from greffier.application.use_cases.get_user_profile import GetUserProfile
from greffier.di.container import get_container

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields async database session from container.
    Session commits after the request, rolls back on error.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_record_reconciler(
    session: AsyncSession = Depends(get_db_session),
) -> RecordReconciler:
    """Get RecordReconciler dependency."""
    return get_container().get_record_reconciler(session)


def get_wallet_binder(
    session: AsyncSession = Depends(get_db_session),
) -> WalletBinder:
    """Get WalletBinder dependency."""
    return get_container().get_wallet_binder(session)


# ================================================================
# Use Case Dependencies
# ================================================================


def get_get_user_profile(
    session: AsyncSession = Depends(get_db_session),
) -> GetUserProfile:
    """Get GetUserProfile use case dependency."""
    return get_container().get_get_user_profile(session)
