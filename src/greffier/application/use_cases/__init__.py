"""Application use cases."""

from greffier.application.use_cases.get_user_profile import (
    GetUserProfile,
    GetUserProfileCommand,
)

__all__ = ["GetUserProfile", "GetUserProfileCommand"]
