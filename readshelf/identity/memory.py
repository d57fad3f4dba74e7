"""
In-memory identity provider.

Used in mock data mode and in tests. Accounts live only for the
lifetime of the provider instance.
"""

import secrets
import uuid
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from readshelf.identity.base import (
    AuthSession,
    IdentityProvider,
    IdentityUser,
    InvalidCredentialsError,
    IdentityError,
    NotAuthenticatedError,
    SignInResult,
    SignUpResult,
    UserExistsError,
)


MIN_PASSWORD_LENGTH = 8


@dataclass
class _Account:
    user_id: str
    username: str
    password: str
    attributes: dict = field(default_factory=dict)
    confirmed: bool = True


class InMemoryIdentityProvider(IdentityProvider):
    """
    Identity provider backed by a dict of accounts.
    
    Issues an opaque random token on every successful sign-in.
    """
    
    def __init__(self, require_confirmation: bool = False):
        """
        Initialize provider.
        
        Args:
            require_confirmation: If True, new accounts must be confirmed
                with ``confirm_sign_up`` before they can sign in
        """
        self.require_confirmation = require_confirmation
        self._accounts: dict[str, _Account] = {}
        self._current: Optional[_Account] = None
        self._token: Optional[str] = None
    
    async def sign_up(
        self,
        username: str,
        password: str,
        attributes: Optional[dict] = None,
    ) -> SignUpResult:
        if username in self._accounts:
            raise UserExistsError(f"User already exists: {username}")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        
        account = _Account(
            user_id=str(uuid.uuid4()),
            username=username,
            password=password,
            attributes=dict(attributes or {}),
            confirmed=not self.require_confirmation,
        )
        self._accounts[username] = account
        logger.debug(f"Registered account {account.user_id}")
        
        return SignUpResult(
            user_id=account.user_id,
            is_sign_up_complete=account.confirmed,
            next_step=None if account.confirmed else "CONFIRM_SIGN_UP",
        )
    
    def confirm_sign_up(self, username: str) -> None:
        """Mark a pending account as confirmed."""
        account = self._accounts.get(username)
        if account is None:
            raise IdentityError(f"Unknown user: {username}")
        account.confirmed = True
    
    async def sign_in(self, username: str, password: str) -> SignInResult:
        account = self._accounts.get(username)
        if account is None or not secrets.compare_digest(account.password, password):
            raise InvalidCredentialsError("Incorrect username or password")
        
        if not account.confirmed:
            return SignInResult(is_signed_in=False, next_step="CONFIRM_SIGN_UP")
        
        self._current = account
        self._token = secrets.token_urlsafe(32)
        return SignInResult(is_signed_in=True)
    
    async def sign_out(self) -> None:
        self._current = None
        self._token = None
    
    async def get_current_user(self) -> IdentityUser:
        if self._current is None:
            raise NotAuthenticatedError("No user is signed in")
        
        account = self._current
        return IdentityUser(
            user_id=account.user_id,
            login_id=account.username,
            display_name=account.attributes.get("name", account.username),
        )
    
    async def fetch_session(self) -> AuthSession:
        if self._current is None or self._token is None:
            raise NotAuthenticatedError("No active session")
        
        return AuthSession(
            id_token=self._token,
            access_token=self._token,
            claims={"sub": self._current.user_id, **self._current.attributes},
        )
