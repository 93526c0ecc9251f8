"""Repository interfaces."""

from greffier.domain.repositories.i_user_repository import IUserRepository

__all__ = ["IUserRepository"]
