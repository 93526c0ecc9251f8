"""
Dependency Injection module for Greffier.

Provides container and dependency functions for FastAPI routes.
"""

from greffier.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    set_container,
    shutdown_container,
)
from greffier.di.dependencies import (
    get_db_session,
    get_get_user_profile,
    get_record_reconciler,
    get_wallet_binder,
)

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "initialize_container",
    "set_container",
    "shutdown_container",
    # Dependencies
    "get_db_session",
    "get_record_reconciler",
    "get_wallet_binder",
    "get_get_user_profile",
]
