"""
WalletAddress value object - Normalized external wallet address.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a wallet address as submitted by a user.

    Business rules:
    - Surrounding whitespace is stripped
    - Must not be empty after stripping
    - Compared as exact strings (no case folding, no format checks)
    - Immutable once created
    """

    address: str

    def __post_init__(self):
        """Normalize and validate wallet address on creation."""
        if self.address is None:
            raise ValueError("Wallet address cannot be empty")

        normalized = self.address.strip()
        if not normalized:
            raise ValueError("Wallet address cannot be empty")

        object.__setattr__(self, "address", normalized)

    def truncated(self) -> str:
        """Return truncated address for display (e.g., 'ABC...XYZ')."""
        if len(self.address) <= 10:
            return self.address
        return f"{self.address[:6]}...{self.address[-4:]}"

    def __str__(self) -> str:
        """String representation returns full address."""
        return self.address
