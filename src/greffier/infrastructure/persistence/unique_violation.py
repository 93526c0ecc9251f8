"""
Classification of storage uniqueness violations.

Maps an ``IntegrityError`` raised by the driver to the unique key of the
users table that caused it, so callers can branch on the field rather than
on a generic error type.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from greffier.domain.value_objects.write_outcome import UniqueField

# PostgreSQL SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"

_CONSTRAINT_FIELDS = {
    "uq_users_wallet_address": UniqueField.WALLET_ADDRESS,
    "uq_users_external_subject_id": UniqueField.EXTERNAL_SUBJECT_ID,
    "users_pkey": UniqueField.ID,
}

# Checked in order; driver messages name the column (SQLite) or the
# constraint (PostgreSQL)
_MESSAGE_MARKERS = (
    ("wallet_address", UniqueField.WALLET_ADDRESS),
    ("external_subject_id", UniqueField.EXTERNAL_SUBJECT_ID),
    ("users_pkey", UniqueField.ID),
    ("users.id", UniqueField.ID),
)


def _driver_error(exc: IntegrityError) -> Optional[BaseException]:
    """Return the innermost driver exception (asyncpg wraps its own)."""
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    return cause if cause is not None else orig


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    driver = _driver_error(exc)
    for err in (orig, driver):
        sqlstate = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if sqlstate == PG_UNIQUE_VIOLATION:
            return True
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate key" in message


def classify_unique_violation(exc: IntegrityError) -> Optional[UniqueField]:
    """
    Identify which unique key of ``users`` an IntegrityError violated.

    Args:
        exc: IntegrityError raised by a write

    Returns:
        The violated UniqueField, or None if the error is not a
        uniqueness violation (NOT NULL, foreign key, ...)
    """
    if not _is_unique_violation(exc):
        return None

    driver = _driver_error(exc)
    constraint = getattr(driver, "constraint_name", None)
    if constraint in _CONSTRAINT_FIELDS:
        return _CONSTRAINT_FIELDS[constraint]

    message = str(exc.orig)
    for marker, field in _MESSAGE_MARKERS:
        if marker in message:
            return field

    return UniqueField.ID
