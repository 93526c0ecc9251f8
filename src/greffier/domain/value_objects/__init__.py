"""Domain value objects."""

from greffier.domain.value_objects.wallet_address import WalletAddress
from greffier.domain.value_objects.write_outcome import (
    UniqueConflict,
    UniqueField,
    WriteOutcome,
    Written,
)

__all__ = [
    "WalletAddress",
    "UniqueField",
    "UniqueConflict",
    "Written",
    "WriteOutcome",
]
