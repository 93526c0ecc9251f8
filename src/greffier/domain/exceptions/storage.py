"""
Storage-related domain exceptions.
"""

from greffier.domain.exceptions.base import GreffierException


class InconsistencyError(GreffierException):
    """
    Raised when storage contradicts itself.

    A uniqueness violation implied a record exists, yet the lookup that
    should find it came back empty (e.g. a concurrent delete raced the
    insert). Fatal for the current request.
    """

    def __init__(self, operation: str):
        super().__init__(
            f"User store returned inconsistent state during {operation}",
            code="INCONSISTENT_STATE",
        )


class InfrastructureError(GreffierException):
    """Base class for failures of external collaborators."""


class StorageUnavailableError(InfrastructureError):
    """Raised when the user store is unreachable or times out."""

    def __init__(self, operation: str):
        super().__init__(
            f"User store unavailable during {operation}",
            code="STORAGE_UNAVAILABLE",
        )
