"""
Outcome of a conditional write against the user store.

Every conditional write either lands (``Written``) or is rejected by a
uniqueness constraint (``UniqueConflict``) naming the field that collided.
Any other storage failure is raised, never returned.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from greffier.domain.entities.user import User


class UniqueField(str, Enum):
    """Unique keys of the users table."""

    ID = "id"
    EXTERNAL_SUBJECT_ID = "external_subject_id"
    WALLET_ADDRESS = "wallet_address"


@dataclass(frozen=True)
class Written:
    """Write committed; carries the record as stored."""

    user: User


@dataclass(frozen=True)
class UniqueConflict:
    """Write rejected because it would duplicate a unique value."""

    field: UniqueField


WriteOutcome = Union[Written, UniqueConflict]
