"""
Wallet Binder - unique, revocable wallet address per user.
"""

from typing import Optional

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.domain.entities.user import User
from greffier.domain.exceptions import (
    InconsistencyError,
    ValidationError,
    WalletConflictError,
)
from greffier.domain.repositories.i_user_repository import IUserRepository
from greffier.domain.value_objects.wallet_address import WalletAddress
from greffier.domain.value_objects.write_outcome import UniqueConflict, UniqueField
from greffier.infrastructure.monitoring import metrics
from greffier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class WalletBinder:
    """
    Read, set, or clear the wallet address bound to a user.

    Business rules:
    - A non-null wallet address belongs to at most one user
    - Rebinding the address a user already holds is a no-op
    - An address held by someone else is a conflict, never reassigned
    - The storage uniqueness constraint decides races; the pre-check
      only avoids a doomed write
    - Clearing is unconditional
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        record_reconciler: RecordReconciler,
    ):
        """
        Initialize binder with dependencies.

        Args:
            user_repository: Repository for user persistence
            record_reconciler: Reconciler used to re-resolve before writes
        """
        self.user_repository = user_repository
        self.record_reconciler = record_reconciler

    async def get_wallet(self, user: User) -> Optional[str]:
        """
        Get the wallet address bound to a user.

        Args:
            user: Previously resolved user

        Returns:
            Wallet address, or None if unbound
        """
        current = await self.user_repository.get_by_external_subject_id(
            user.external_subject_id
        )
        return current.wallet_address if current else None

    async def set_wallet(self, user: User, new_address: str) -> str:
        """
        Bind a wallet address to a user.

        Args:
            user: Previously resolved user
            new_address: Wallet address as submitted (trimmed here)

        Returns:
            The bound wallet address

        Raises:
            ValidationError: If the address is empty after trimming
            WalletConflictError: If another user holds the address
            InconsistencyError: If the write collides on a key other than
                the wallet address
        """
        # 1. Normalize
        try:
            wallet = WalletAddress(address=new_address)
        except ValueError as e:
            metrics.wallet_operations_total.labels(
                operation="set", outcome="invalid"
            ).inc()
            raise ValidationError(field="wallet_address", reason=str(e))

        # 2. Re-resolve right before mutating
        current = await self.record_reconciler.refresh(user.external_subject_id)

        # 3. Same address already bound
        if current.wallet_address == wallet.address:
            metrics.wallet_operations_total.labels(
                operation="set", outcome="unchanged"
            ).inc()
            return current.wallet_address

        # 4. Held by another user
        owner = await self.user_repository.get_by_wallet(wallet.address)
        if owner is not None and owner.id != current.id:
            self._reject(current, wallet, stage="pre-check")

        # 5. Conditional write; storage has the final say
        outcome = await self.user_repository.update_wallet(current.id, wallet.address)
        if isinstance(outcome, UniqueConflict):
            if outcome.field is not UniqueField.WALLET_ADDRESS:
                logger.error(
                    f"Wallet update for {current.id} hit unexpected unique "
                    f"{outcome.field.value}",
                    extra={"user_id": current.id, "field": outcome.field.value},
                )
                raise InconsistencyError("wallet binding")
            self._reject(current, wallet, stage="write")

        metrics.wallet_operations_total.labels(operation="set", outcome="bound").inc()
        logger.info(
            f"Wallet {wallet.truncated()} linked to user {current.id}",
            extra={"user_id": current.id},
        )
        return outcome.user.wallet_address

    async def clear_wallet(self, user: User) -> None:
        """
        Unbind whatever wallet address a user holds.

        Args:
            user: Previously resolved user

        Returns:
            None (the new wallet value)

        Raises:
            EntityNotFoundError: If the user record no longer exists
        """
        outcome = await self.user_repository.update_wallet(user.id, None)

        metrics.wallet_operations_total.labels(
            operation="clear", outcome="cleared"
        ).inc()
        logger.info(f"Wallet unlinked for user {user.id}", extra={"user_id": user.id})

        return outcome.user.wallet_address

    def _reject(self, current: User, wallet: WalletAddress, stage: str) -> None:
        """Record a conflict and raise WalletConflictError."""
        metrics.wallet_operations_total.labels(
            operation="set", outcome="conflict"
        ).inc()
        logger.info(
            f"Wallet {wallet.truncated()} already linked elsewhere, "
            f"rejected for user {current.id} at {stage}",
            extra={"user_id": current.id, "stage": stage},
        )
        raise WalletConflictError()
