"""
Domain exceptions package.
"""

# Auth exceptions
from greffier.domain.exceptions.auth import (
    ExpiredTokenError,
    InvalidTokenError,
    UnauthenticatedError,
)

# Base exceptions
from greffier.domain.exceptions.base import (
    EntityNotFoundError,
    GreffierException,
    ValidationError,
)

# Storage exceptions
from greffier.domain.exceptions.storage import (
    InconsistencyError,
    InfrastructureError,
    StorageUnavailableError,
)

# Wallet exceptions
from greffier.domain.exceptions.wallet import WalletConflictError

__all__ = [
    # Base
    "GreffierException",
    "EntityNotFoundError",
    "ValidationError",
    # Auth
    "UnauthenticatedError",
    "InvalidTokenError",
    "ExpiredTokenError",
    # Storage
    "InconsistencyError",
    "InfrastructureError",
    "StorageUnavailableError",
    # Wallet
    "WalletConflictError",
]
