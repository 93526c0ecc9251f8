"""
Wallet binding domain exceptions.
"""

from greffier.domain.exceptions.base import GreffierException


class WalletConflictError(GreffierException):
    """
    Raised when a wallet address is already bound to another user.

    The message names neither the other user nor the address.
    """

    def __init__(self):
        super().__init__(
            "Wallet address is already linked to another user.",
            code="WALLET_CONFLICT",
        )
