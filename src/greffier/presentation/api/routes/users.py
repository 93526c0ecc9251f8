"""
User API routes.

Provides endpoints for the current user:
- GET /users/me - Get current authenticated user with roles
"""

from fastapi import APIRouter, Depends, status

from greffier.application.use_cases.get_user_profile import (
    GetUserProfile,
    GetUserProfileCommand,
)
from greffier.di.dependencies import get_get_user_profile
from greffier.presentation.api.middleware.auth import get_current_subject_id
from greffier.presentation.schemas.user_schemas import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
    description="Get authenticated user's record including role names",
)
async def get_current_user_profile(
    subject_id: str = Depends(get_current_subject_id),
    use_case: GetUserProfile = Depends(get_get_user_profile),
) -> UserResponse:
    """
    Get current authenticated user's profile.

    Args:
        subject_id: Subject from the bearer token (injected)
        use_case: GetUserProfile use case (injected)

    Returns:
        Current user profile details with roles
    """
    user = await use_case.execute(GetUserProfileCommand(subject_id=subject_id))
    return UserResponse.from_entity(user)
