"""API schemas."""

from greffier.presentation.schemas.user_schemas import (
    CheckUserResponse,
    UserResponse,
)
from greffier.presentation.schemas.wallet_schemas import (
    LinkWalletRequest,
    WalletResponse,
)

__all__ = [
    "CheckUserResponse",
    "UserResponse",
    "LinkWalletRequest",
    "WalletResponse",
]
