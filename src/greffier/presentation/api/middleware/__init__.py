"""
API middleware for Greffier.
"""

from greffier.presentation.api.middleware.error_handler import (
    greffier_exception_handler,
    request_validation_exception_handler,
)

__all__ = [
    "greffier_exception_handler",
    "request_validation_exception_handler",
]
