"""
User repository implementation.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from greffier.domain.entities.user import User
from greffier.domain.exceptions import (
    EntityNotFoundError,
    InconsistencyError,
    StorageUnavailableError,
)
from greffier.domain.repositories.i_user_repository import IUserRepository
from greffier.domain.value_objects.write_outcome import (
    UniqueConflict,
    WriteOutcome,
    Written,
)
from greffier.infrastructure.monitoring.logger import get_logger
from greffier.infrastructure.persistence.models import UserModel
from greffier.infrastructure.persistence.unique_violation import (
    classify_unique_violation,
)

logger = get_logger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Write strategy:
    - Each conditional write runs in a SAVEPOINT, so a uniqueness
      violation rolls back only that statement and the session stays usable
    - Uniqueness violations are returned as UniqueConflict
    - Connection failures and timeouts raise StorageUnavailableError
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert_by_id(self, subject_id: str) -> WriteOutcome:
        """
        Insert or update the user keyed on ``id == subject_id``.

        Args:
            subject_id: External subject identifier

        Returns:
            Written with the stored user, or UniqueConflict
        """
        now = datetime.now()
        insert = self._insert_for_dialect()
        stmt = (
            insert(UserModel)
            .values(
                id=subject_id,
                external_subject_id=subject_id,
                wallet_address=None,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_update(
                index_elements=[UserModel.id],
                set_={"external_subject_id": subject_id, "updated_at": now},
            )
        )

        async with self._storage_call("upsert_by_id"):
            conflict = await self._execute_conditional(stmt)
            if conflict is not None:
                return conflict

            user = await self._fetch_one(UserModel.id == subject_id)

        if user is None:
            raise InconsistencyError("upsert_by_id")

        return Written(user=user)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by canonical ID.

        Args:
            user_id: User canonical identifier

        Returns:
            User entity if found, None otherwise
        """
        async with self._storage_call("get_by_id"):
            return await self._fetch_one(UserModel.id == user_id)

    async def get_by_external_subject_id(self, subject_id: str) -> Optional[User]:
        """
        Get user by external subject identifier.

        Args:
            subject_id: Identifier asserted by the auth provider

        Returns:
            User entity if found, None otherwise
        """
        async with self._storage_call("get_by_external_subject_id"):
            return await self._fetch_one(
                UserModel.external_subject_id == subject_id
            )

    async def get_by_wallet(self, wallet_address: str) -> Optional[User]:
        """
        Get user by wallet address.

        Args:
            wallet_address: Wallet address (exact match)

        Returns:
            User entity if found, None otherwise
        """
        async with self._storage_call("get_by_wallet"):
            return await self._fetch_one(UserModel.wallet_address == wallet_address)

    async def update_wallet(
        self, user_id: str, wallet_address: Optional[str]
    ) -> WriteOutcome:
        """
        Set or clear the wallet of one user, scoped to its primary key.

        Args:
            user_id: User canonical identifier
            wallet_address: New address, or None to clear

        Returns:
            Written with the updated user, or UniqueConflict

        Raises:
            EntityNotFoundError: If no user has this ID
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(wallet_address=wallet_address, updated_at=datetime.now())
            .execution_options(synchronize_session=False)
        )

        async with self._storage_call("update_wallet"):
            conflict = await self._execute_conditional(stmt)
            if conflict is not None:
                return conflict

            user = await self._fetch_one(UserModel.id == user_id)

        if user is None:
            raise EntityNotFoundError("User", user_id)

        return Written(user=user)

    async def _execute_conditional(self, stmt) -> Optional[UniqueConflict]:
        """
        Execute a write inside a SAVEPOINT.

        Returns:
            UniqueConflict if a unique key was violated, None on success
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as exc:
            field = classify_unique_violation(exc)
            if field is None:
                raise
            return UniqueConflict(field=field)
        return None

    async def _fetch_one(self, criterion) -> Optional[User]:
        """Fetch a single user, bypassing stale identity-map state."""
        stmt = (
            select(UserModel)
            .where(criterion)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _insert_for_dialect(self):
        """Return the dialect-specific INSERT supporting ON CONFLICT."""
        dialect = self.session.bind.dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise RuntimeError(f"Upsert not supported for dialect {dialect}")

    @asynccontextmanager
    async def _storage_call(self, operation: str) -> AsyncIterator[None]:
        """Translate connectivity failures into StorageUnavailableError."""
        try:
            yield
        except (OperationalError, InterfaceError, asyncio.TimeoutError) as exc:
            logger.error(
                f"User store unavailable during {operation}: {type(exc).__name__}",
                extra={"operation": operation},
            )
            raise StorageUnavailableError(operation) from exc

    def _to_entity(self, model: UserModel) -> User:
        """
        Convert UserModel to User entity.

        Args:
            model: SQLAlchemy model

        Returns:
            User domain entity
        """
        return User(
            id=model.id,
            external_subject_id=model.external_subject_id,
            wallet_address=model.wallet_address,
            roles=sorted(role.name for role in model.roles),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
