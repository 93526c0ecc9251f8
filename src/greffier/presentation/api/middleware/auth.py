"""
Authentication dependencies.

Turns the provider's bearer token into a subject identifier, then into the
caller's canonical user record.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.di.dependencies import get_record_reconciler
from greffier.domain.entities.user import User
from greffier.domain.exceptions import UnauthenticatedError
from greffier.infrastructure.auth.jwt_handler import extract_subject_id

# Missing header handled below so every auth failure maps to 401
security = HTTPBearer(auto_error=False)


async def get_current_subject_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Extract the pre-verified subject identifier from the bearer token.

    Args:
        credentials: HTTP Authorization header with Bearer token

    Returns:
        Subject identifier asserted by the auth provider

    Raises:
        UnauthenticatedError: If the header is missing or token invalid
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    return extract_subject_id(credentials.credentials)


async def get_current_user(
    subject_id: str = Depends(get_current_subject_id),
    reconciler: RecordReconciler = Depends(get_record_reconciler),
) -> User:
    """
    Resolve the authenticated subject to its canonical user record.

    Args:
        subject_id: Subject from the bearer token
        reconciler: RecordReconciler (injected)

    Returns:
        User domain entity (created on first sight)
    """
    return await reconciler.resolve(subject_id)
