"""Domain entities."""

from greffier.domain.entities.user import User

__all__ = ["User"]
