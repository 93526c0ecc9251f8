"""
API schemas for wallet binding.

Request and response models for wallet endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LinkWalletRequest(BaseModel):
    """
    Request to bind a wallet address to the current user.

    Emptiness is checked by the binder so that a missing or blank
    address yields the same validation error.
    """

    wallet_address: Optional[str] = Field(
        default=None,
        description="Wallet address; surrounding whitespace is ignored",
        examples=["kshy5yns5FGGXcFVfjT2fTzVsQLFnbZzL9zuh1ZKR2y"],
    )


class WalletResponse(BaseModel):
    """Wallet currently bound to the user (null when unbound)."""

    wallet_address: Optional[str] = Field(
        default=None,
        description="Bound wallet address",
    )
