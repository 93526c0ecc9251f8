"""
Authentication domain exceptions.
"""

from greffier.domain.exceptions.base import GreffierException


class UnauthenticatedError(GreffierException):
    """Raised when no valid external subject identifier was supplied."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class ExpiredTokenError(UnauthenticatedError):
    """Raised when the provider token has expired."""

    def __init__(self):
        super().__init__("Authentication token has expired")


class InvalidTokenError(UnauthenticatedError):
    """Raised when the provider token is malformed or invalid."""

    def __init__(self):
        super().__init__("Invalid authentication token")
