"""
Infrastructure persistence package.
"""

from greffier.infrastructure.persistence.database import Database
from greffier.infrastructure.persistence.models import (
    Base,
    RoleModel,
    UserModel,
    UserRoleModel,
)

__all__ = [
    "Database",
    "Base",
    "UserModel",
    "RoleModel",
    "UserRoleModel",
]
