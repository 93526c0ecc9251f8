"""
Auth API routes.

Provides endpoints called right after the provider signs a user in:
- POST /auth/check-user - Ensure the canonical user record exists
"""

from fastapi import APIRouter, Depends, status

from greffier.domain.entities.user import User
from greffier.infrastructure.monitoring.logger import get_logger
from greffier.presentation.api.middleware.auth import get_current_user
from greffier.presentation.schemas.user_schemas import (
    CheckUserResponse,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger(__name__)


@router.post(
    "/check-user",
    response_model=CheckUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Ensure user record",
    description="Create the caller's user record on first sight, return it",
)
async def check_user(
    current_user: User = Depends(get_current_user),
) -> CheckUserResponse:
    """
    Ensure the authenticated subject has a canonical user record.

    Idempotent: concurrent first calls for the same subject all return
    the same record.

    Args:
        current_user: User resolved from the bearer token (injected)

    Returns:
        The canonical user record
    """
    logger.info(f"User {current_user.id} ensured", extra={"user_id": current_user.id})
    return CheckUserResponse(user=UserResponse.from_entity(current_user))
