"""
Provider token helper for tests.

Signs a JWT the way the auth provider would, using the test settings key.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

TEST_JWT_KEY = "test-provider-secret"


def issue_token(
    subject_id: Optional[str],
    expires_in: timedelta = timedelta(minutes=5),
    key: str = TEST_JWT_KEY,
    **claims,
) -> str:
    """
    Issue a signed HS256 token for a subject.

    Args:
        subject_id: Value of the ``sub`` claim (omitted when None)
        expires_in: Lifetime; negative for an already expired token
        key: Signing key
        **claims: Extra claims (iss, aud, ...)

    Returns:
        Encoded JWT
    """
    payload = {"exp": datetime.now(timezone.utc) + expires_in, **claims}
    if subject_id is not None:
        payload["sub"] = subject_id
    return jwt.encode(payload, key, algorithm="HS256")
