"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from greffier.domain.entities.user import User
from greffier.domain.value_objects.write_outcome import WriteOutcome


class IUserRepository(ABC):
    """
    Interface for user persistence operations.

    Conditional writes report uniqueness violations as a returned
    ``UniqueConflict`` naming the colliding field. Unavailability is
    raised as ``StorageUnavailableError``.
    """

    @abstractmethod
    async def upsert_by_id(self, subject_id: str) -> WriteOutcome:
        """
        Insert or update the user keyed on ``id == subject_id``.

        Both paths set ``external_subject_id = subject_id``.

        Args:
            subject_id: External subject identifier

        Returns:
            Written with the stored user, or UniqueConflict
        """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by canonical ID.

        Args:
            user_id: User canonical identifier

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_external_subject_id(self, subject_id: str) -> Optional[User]:
        """
        Get user by external subject identifier.

        Args:
            subject_id: Identifier asserted by the auth provider

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_wallet(self, wallet_address: str) -> Optional[User]:
        """
        Get user by wallet address.

        Args:
            wallet_address: Wallet address (exact match)

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
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
