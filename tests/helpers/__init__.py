"""Test helpers for Greffier."""

from tests.helpers.in_memory_user_repository import InMemoryUserRepository
from tests.helpers.tokens import issue_token

__all__ = ["InMemoryUserRepository", "issue_token"]
