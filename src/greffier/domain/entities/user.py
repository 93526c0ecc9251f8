"""
User entity - Canonical local record for an externally authenticated principal.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class User:
    """
    User entity - one record per external subject identifier.

    The canonical id equals the subject identifier asserted by the
    authentication provider. Wallet address is optional and, when set,
    unique across all users. Roles are read-only here.
    """

    id: str
    external_subject_id: str
    wallet_address: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User id is required")

        if not self.external_subject_id:
            raise ValueError("External subject id is required")

    @property
    def has_identity_drift(self) -> bool:
        """True when the canonical id and the subject id disagree."""
        return self.id != self.external_subject_id

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": self.id,
            "external_subject_id": self.external_subject_id,
            "wallet_address": self.wallet_address,
            "roles": list(self.roles),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
