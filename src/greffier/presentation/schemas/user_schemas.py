"""
User API schemas.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from greffier.domain.entities.user import User


class UserResponse(BaseModel):
    """Canonical user record as seen by its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    external_subject_id: str
    wallet_address: Optional[str] = None
    roles: List[str] = Field(
        default_factory=list,
        description="Role names assigned to the user",
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        """Build response from domain entity."""
        return cls.model_validate(user)


class CheckUserResponse(BaseModel):
    """Response of the ensure-user endpoint."""

    user: UserResponse
