"""
Identity Module

The identity capability consumed by the auth state manager and the
session resolver.
"""

from readshelf.identity.base import (
    IdentityProvider,
    IdentityError,
    NotAuthenticatedError,
    InvalidCredentialsError,
    UserExistsError,
    SignInResult,
    SignUpResult,
    IdentityUser,
    AuthSession,
)
from readshelf.identity.memory import InMemoryIdentityProvider

__all__ = [
    "IdentityProvider",
    "IdentityError",
    "NotAuthenticatedError",
    "InvalidCredentialsError",
    "UserExistsError",
    "SignInResult",
    "SignUpResult",
    "IdentityUser",
    "AuthSession",
    "InMemoryIdentityProvider",
]
