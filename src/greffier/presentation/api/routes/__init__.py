"""API routes."""
from greffier.presentation.api.routes import auth, users, wallet

__all__ = ["auth", "users", "wallet"]
