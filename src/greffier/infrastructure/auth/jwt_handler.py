"""
JWT handler for provider-issued session tokens.

The auth provider signs a token whose ``sub`` claim is the subject
identifier. This module only checks signature, expiry and (when
configured) issuer and audience, then hands back the subject.
"""

from typing import Any, Dict

from jose import ExpiredSignatureError, JWTError, jwt

from greffier.config.settings import get_settings
from greffier.domain.exceptions.auth import ExpiredTokenError, InvalidTokenError


def decode_provider_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a provider-issued JWT.

    Args:
        token: JWT token string

    Returns:
        Decoded claims

    Raises:
        ExpiredTokenError: If token has expired
        InvalidTokenError: If token is invalid or malformed
    """
    settings = get_settings()

    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}

    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_KEY,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            issuer=settings.AUTH_JWT_ISSUER,
            options=options,
        )
    except ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()


def extract_subject_id(token: str) -> str:
    """
    Extract the subject identifier from a provider token.

    Args:
        token: JWT token string

    Returns:
        Subject identifier (``sub`` claim)

    Raises:
        InvalidTokenError: If token is invalid or carries no subject

    Example:
        >>> subject_id = extract_subject_id(token)
    """
    claims = decode_provider_token(token)
    subject_id = claims.get("sub")

    if not isinstance(subject_id, str) or not subject_id.strip():
        raise InvalidTokenError()

    return subject_id
