"""Application services."""

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.application.services.wallet_binder import WalletBinder

__all__ = ["RecordReconciler", "WalletBinder"]
