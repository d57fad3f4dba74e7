"""
Auth Module

In-memory authentication state for the signed-in user.
"""

from readshelf.auth.state import (
    AuthStateManager,
    AuthState,
    AuthStatus,
)

__all__ = [
    "AuthStateManager",
    "AuthState",
    "AuthStatus",
]
