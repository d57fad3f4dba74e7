"""
Identity capability interface.

The identity provider owns credentials and session tokens. The client
only talks to it through this interface: sign in, sign out, register,
look up the current user, and fetch the current session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class IdentityError(Exception):
    """Base exception for identity provider failures."""


class NotAuthenticatedError(IdentityError):
    """No user is signed in."""


class InvalidCredentialsError(IdentityError):
    """Username or password is wrong."""


class UserExistsError(IdentityError):
    """An account with this username already exists."""


@dataclass
class SignInResult:
    """Outcome of a sign-in attempt."""
    
    is_signed_in: bool
    next_step: Optional[str] = None  # e.g. "CONFIRM_SIGN_UP"


@dataclass
class SignUpResult:
    """Outcome of a registration."""
    
    user_id: str
    is_sign_up_complete: bool
    next_step: Optional[str] = None


@dataclass
class IdentityUser:
    """The provider's view of the signed-in user."""
    
    user_id: str
    login_id: Optional[str] = None
    display_name: str = ""


@dataclass
class AuthSession:
    """Tokens for the current session."""
    
    id_token: Optional[str] = None
    access_token: Optional[str] = None
    claims: dict = field(default_factory=dict)


class IdentityProvider(ABC):
    """Abstract base class for identity providers."""
    
    @abstractmethod
    async def sign_in(self, username: str, password: str) -> SignInResult:
        """Sign a user in."""
        pass
    
    @abstractmethod
    async def sign_out(self) -> None:
        """Sign the current user out."""
        pass
    
    @abstractmethod
    async def sign_up(
        self,
        username: str,
        password: str,
        attributes: Optional[dict] = None,
    ) -> SignUpResult:
        """Register a new account."""
        pass
    
    @abstractmethod
    async def get_current_user(self) -> IdentityUser:
        """Return the signed-in user or raise NotAuthenticatedError."""
        pass
    
    @abstractmethod
    async def fetch_session(self) -> AuthSession:
        """Return the current session or raise NotAuthenticatedError."""
        pass
