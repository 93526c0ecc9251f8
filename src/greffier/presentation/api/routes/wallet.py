"""
Wallet API routes.

Provides endpoints for wallet binding:
- GET /wallet - Get the wallet bound to the current user
- POST /wallet - Bind a wallet address to the current user
- DELETE /wallet - Unbind the current user's wallet
"""

from fastapi import APIRouter, Depends, status

from greffier.application.services.wallet_binder import WalletBinder
from greffier.di.dependencies import get_wallet_binder
from greffier.domain.entities.user import User
from greffier.presentation.api.middleware.auth import get_current_user
from greffier.presentation.schemas.wallet_schemas import (
    LinkWalletRequest,
    WalletResponse,
)

router = APIRouter(prefix="/wallet", tags=["Wallet"])


@router.get(
    "",
    response_model=WalletResponse,
    status_code=status.HTTP_200_OK,
    summary="Get linked wallet",
)
async def get_wallet(
    current_user: User = Depends(get_current_user),
    binder: WalletBinder = Depends(get_wallet_binder),
) -> WalletResponse:
    """Get the wallet address bound to the current user (or null)."""
    wallet_address = await binder.get_wallet(current_user)
    return WalletResponse(wallet_address=wallet_address)


@router.post(
    "",
    response_model=WalletResponse,
    status_code=status.HTTP_200_OK,
    summary="Link wallet",
    description="Bind a wallet address; each address belongs to one user",
)
async def link_wallet(
    request: LinkWalletRequest,
    current_user: User = Depends(get_current_user),
    binder: WalletBinder = Depends(get_wallet_binder),
) -> WalletResponse:
    """
    Bind a wallet address to the current user.

    Args:
        request: Wallet address to bind
        current_user: User resolved from the bearer token (injected)
        binder: WalletBinder (injected)

    Returns:
        The bound wallet address

    Raises:
        ValidationError: 400 if the address is empty
        WalletConflictError: 409 if another user holds the address
    """
    wallet_address = await binder.set_wallet(
        current_user, request.wallet_address or ""
    )
    return WalletResponse(wallet_address=wallet_address)


@router.delete(
    "",
    response_model=WalletResponse,
    status_code=status.HTTP_200_OK,
    summary="Unlink wallet",
)
async def unlink_wallet(
    current_user: User = Depends(get_current_user),
    binder: WalletBinder = Depends(get_wallet_binder),
) -> WalletResponse:
    """Unbind the current user's wallet; always returns null."""
    wallet_address = await binder.clear_wallet(current_user)
    return WalletResponse(wallet_address=wallet_address)
