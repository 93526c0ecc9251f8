"""
Unit tests for WalletBinder service.

Tests binding, rebinding, conflicts and clearing with mocked storage.

Usage:
    pytest tests/unit/application/test_wallet_binder.py
"""

from unittest.mock import AsyncMock

import pytest

from greffier.application.services.wallet_binder import WalletBinder
from greffier.domain.entities.user import User
from greffier.domain.exceptions import (
    EntityNotFoundError,
    InconsistencyError,
    ValidationError,
    WalletConflictError,
)
from greffier.domain.value_objects.write_outcome import (
    UniqueConflict,
    UniqueField,
    Written,
)

WALLET = "kshy5yns5FGGXcFVfjT2fTzVsQLFnbZzL9zuh1ZKR2y"


class TestWalletBinder:
    """Unit tests for WalletBinder."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _user(self, user_id: str = "sub_1", wallet: str | None = None) -> User:
        return User(id=user_id, external_subject_id=user_id, wallet_address=wallet)

    def _binder(self, current: User):
        repo = AsyncMock()
        reconciler = AsyncMock()
        reconciler.refresh.return_value = current
        return WalletBinder(user_repository=repo, record_reconciler=reconciler), repo

    # ================================================================
    # get_wallet
    # ================================================================

    async def test_get_wallet_returns_current_value(self):
        binder, repo = self._binder(self._user())
        repo.get_by_external_subject_id.return_value = self._user(wallet=WALLET)

        assert await binder.get_wallet(self._user()) == WALLET
        repo.get_by_external_subject_id.assert_called_once_with("sub_1")

    async def test_get_wallet_unbound(self):
        binder, repo = self._binder(self._user())
        repo.get_by_external_subject_id.return_value = self._user()

        assert await binder.get_wallet(self._user()) is None

    async def test_get_wallet_missing_record(self):
        binder, repo = self._binder(self._user())
        repo.get_by_external_subject_id.return_value = None

        assert await binder.get_wallet(self._user()) is None

    # ================================================================
    # set_wallet
    # ================================================================

    async def test_set_wallet_binds_trimmed_address(self):
        current = self._user()
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = None
        repo.update_wallet.return_value = Written(user=self._user(wallet=WALLET))

        result = await binder.set_wallet(current, f"  {WALLET}  ")

        assert result == WALLET
        repo.get_by_wallet.assert_called_once_with(WALLET)
        repo.update_wallet.assert_called_once_with("sub_1", WALLET)

    async def test_set_wallet_same_address_is_noop(self):
        current = self._user(wallet=WALLET)
        binder, repo = self._binder(current)

        result = await binder.set_wallet(current, WALLET)

        assert result == WALLET
        repo.get_by_wallet.assert_not_called()
        repo.update_wallet.assert_not_called()

    @pytest.mark.parametrize("address", ["", "   "])
    async def test_set_wallet_rejects_empty(self, address):
        current = self._user()
        binder, repo = self._binder(current)

        with pytest.raises(ValidationError) as exc_info:
            await binder.set_wallet(current, address)

        assert exc_info.value.code == "VALIDATION_ERROR"
        binder.record_reconciler.refresh.assert_not_called()
        repo.update_wallet.assert_not_called()

    async def test_set_wallet_held_by_other_user_conflicts(self):
        current = self._user()
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = self._user(user_id="sub_2", wallet=WALLET)

        with pytest.raises(WalletConflictError) as exc_info:
            await binder.set_wallet(current, WALLET)

        assert exc_info.value.code == "WALLET_CONFLICT"
        assert "sub_2" not in exc_info.value.message
        assert WALLET not in exc_info.value.message
        repo.update_wallet.assert_not_called()

    async def test_set_wallet_write_conflict_is_rejected(self):
        """Storage uniqueness decides when the pre-check raced."""
        current = self._user()
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = None
        repo.update_wallet.return_value = UniqueConflict(
            field=UniqueField.WALLET_ADDRESS
        )

        with pytest.raises(WalletConflictError):
            await binder.set_wallet(current, WALLET)

    async def test_set_wallet_write_conflict_on_other_key_is_inconsistent(self):
        """A write colliding on anything but the wallet is a storage anomaly."""
        current = self._user()
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = None
        repo.update_wallet.return_value = UniqueConflict(
            field=UniqueField.EXTERNAL_SUBJECT_ID
        )

        with pytest.raises(InconsistencyError) as exc_info:
            await binder.set_wallet(current, WALLET)

        assert exc_info.value.code == "INCONSISTENT_STATE"

    async def test_set_wallet_uses_refreshed_record(self):
        """Writes target the re-resolved record, not the caller's copy."""
        stale = self._user()
        current = User(id="legacy-42", external_subject_id="sub_1")
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = None
        repo.update_wallet.return_value = Written(
            user=User(
                id="legacy-42", external_subject_id="sub_1", wallet_address=WALLET
            )
        )

        await binder.set_wallet(stale, WALLET)

        binder.record_reconciler.refresh.assert_called_once_with("sub_1")
        repo.update_wallet.assert_called_once_with("legacy-42", WALLET)

    async def test_set_wallet_moves_between_own_addresses(self):
        current = self._user(wallet="OldWallet")
        binder, repo = self._binder(current)
        repo.get_by_wallet.return_value = None
        repo.update_wallet.return_value = Written(user=self._user(wallet=WALLET))

        assert await binder.set_wallet(current, WALLET) == WALLET

    # ================================================================
    # clear_wallet
    # ================================================================

    async def test_clear_wallet(self):
        current = self._user(wallet=WALLET)
        binder, repo = self._binder(current)
        repo.update_wallet.return_value = Written(user=self._user())

        assert await binder.clear_wallet(current) is None
        repo.update_wallet.assert_called_once_with("sub_1", None)

    async def test_clear_wallet_missing_record(self):
        current = self._user()
        binder, repo = self._binder(current)
        repo.update_wallet.side_effect = EntityNotFoundError("User", "sub_1")

        with pytest.raises(EntityNotFoundError):
            await binder.clear_wallet(current)
