"""
Auth State Manager

Owns the single current-user slot for the client and its lifecycle:
- Bootstrap check against the identity provider
- Login / logout / signup
- Change notification for subscribers (UI bindings)

``is_authenticated`` is always derived from ``user``; it is never
stored separately.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from readshelf.identity.base import IdentityProvider, IdentityUser
from readshelf.models import User, UserRole, utc_now_iso


class AuthStatus(str, Enum):
    """Coarse authentication status."""
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class AuthState:
    """Immutable snapshot of the auth state."""
    
    user: Optional[User] = None
    is_loading: bool = True
    
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
    
    @property
    def status(self) -> AuthStatus:
        if self.is_loading:
            return AuthStatus.LOADING
        if self.is_authenticated:
            return AuthStatus.AUTHENTICATED
        return AuthStatus.UNAUTHENTICATED


Listener = Callable[[AuthState], None]


class AuthStateManager:
    """
    Single-slot store for the signed-in user.
    
    Mutated only through ``bootstrap``, ``login``, ``logout`` and
    ``signup``; everything else reads it.
    """
    
    def __init__(
        self,
        identity: IdentityProvider,
        clear_user_on_logout_failure: bool = False,
    ):
        """
        Initialize manager.
        
        Args:
            identity: Identity provider
            clear_user_on_logout_failure: Whether a failed remote sign-out
                still clears the local user
        """
        self.identity = identity
        self.clear_user_on_logout_failure = clear_user_on_logout_failure
        
        self._state = AuthState()
        self._listeners: list[Listener] = []
        self._bootstrapped = False
    
    # -------------------------------------------------------------------------
    # Read contract
    # -------------------------------------------------------------------------
    
    @property
    def user(self) -> Optional[User]:
        return self._state.user
    
    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated
    
    @property
    def is_loading(self) -> bool:
        return self._state.is_loading
    
    @property
    def status(self) -> AuthStatus:
        return self._state.status
    
    def snapshot(self) -> AuthState:
        """Current state."""
        return self._state
    
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every change.
        
        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)
        
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        
        return unsubscribe
    
    def _set_state(self, user: Optional[User], is_loading: bool) -> None:
        self._state = AuthState(user=user, is_loading=is_loading)
        
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"Auth state listener failed: {e}")
    
    @staticmethod
    def _to_user(identity_user: IdentityUser, email: Optional[str] = None) -> User:
        return User(
            id=identity_user.user_id,
            email=email if email is not None else (identity_user.login_id or ""),
            name=identity_user.display_name,
            role=UserRole.USER,
            created_at=utc_now_iso(),
        )
    
    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    
    async def bootstrap(self) -> AuthState:
        """
        Check for an existing session. Runs once per manager.
        
        Any failure leaves the manager unauthenticated. Loading always
        ends, whatever the outcome.
        """
        if self._bootstrapped:
            return self._state
        self._bootstrapped = True
        
        user = None
        try:
            identity_user = await self.identity.get_current_user()
            user = self._to_user(identity_user)
        except Exception as e:
            logger.debug(f"No existing session at startup: {e}")
        finally:
            self._set_state(user=user, is_loading=False)
        
        return self._state
    
    async def login(self, email: str, password: str) -> None:
        """
        Sign in and populate the current user.
        
        The user's email is taken from the ``email`` argument, not from
        the provider.
        
        Raises:
            Whatever the identity provider raised
        """
        try:
            result = await self.identity.sign_in(email, password)
            if result.is_signed_in:
                identity_user = await self.identity.get_current_user()
                self._set_state(
                    user=self._to_user(identity_user, email=email),
                    is_loading=self._state.is_loading,
                )
                logger.info(f"Signed in user {identity_user.user_id}")
            else:
                logger.info(f"Sign-in not complete, next step: {result.next_step}")
        except Exception as e:
            logger.error(f"Login error: {e}")
            raise
    
    async def logout(self) -> None:
        """
        Sign out and clear the current user.
        
        Failures are logged, not raised. Whether the local user is still
        cleared after a failure depends on ``clear_user_on_logout_failure``.
        """
        try:
            await self.identity.sign_out()
        except Exception as e:
            logger.error(f"Logout error: {e}")
            if self.clear_user_on_logout_failure:
                self._set_state(user=None, is_loading=self._state.is_loading)
            return
        
        self._set_state(user=None, is_loading=self._state.is_loading)
        logger.info("Signed out")
    
    async def signup(self, email: str, password: str, name: str) -> None:
        """
        Register a new account. Does not sign the user in.
        
        Raises:
            Whatever the identity provider raised
        """
        try:
            await self.identity.sign_up(
                username=email,
                password=password,
                attributes={"email": email, "name": name},
            )
        except Exception as e:
            logger.error(f"Signup error: {e}")
            raise
