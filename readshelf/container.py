"""
Composition root.

Wires settings, identity provider, session resolver, auth state,
resource client and reporter together. Components are built lazily on
first access; the data mode picks the resource client implementation.
"""

from typing import Optional

import httpx
from loguru import logger

from readshelf.auth.state import AuthStateManager
from readshelf.client.base import ResourceClient
from readshelf.client.factory import create_resource_client
from readshelf.config import DataMode, Settings, get_settings
from readshelf.identity.base import IdentityProvider
from readshelf.identity.memory import InMemoryIdentityProvider
from readshelf.logging import configure_logging
from readshelf.reporting import NotificationSink, Reporter
from readshelf.session import SessionResolver


class ClientContainer:
    """Lazily-built client components sharing one identity provider."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        identity: Optional[IdentityProvider] = None,
        sink: Optional[NotificationSink] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        configure_logs: bool = False,
    ):
        """
        Initialize container.
        
        Args:
            settings: Client settings (defaults to environment settings)
            identity: Identity provider; required in live mode, defaults
                to an in-memory provider in mock mode
            sink: Notification sink for the reporter
            transport: Optional httpx transport for the live client
            configure_logs: Install the library log handler at settings.log_level
        """
        self.settings = settings or get_settings()
        
        if configure_logs:
            configure_logging(self.settings.log_level)
        
        if identity is None:
            if self.settings.data_mode != DataMode.MOCK:
                raise ValueError("An identity provider is required in live data mode")
            logger.info("No identity provider given, using in-memory provider")
            identity = InMemoryIdentityProvider()
        
        self.identity = identity
        self._sink = sink
        self._transport = transport
        
        self._session_resolver = None
        self._auth = None
        self._resources = None
        self._reporter = None
    
    @property
    def session_resolver(self) -> SessionResolver:
        if self._session_resolver is None:
            self._session_resolver = SessionResolver(self.identity)
        return self._session_resolver
    
    @property
    def auth(self) -> AuthStateManager:
        if self._auth is None:
            self._auth = AuthStateManager(
                identity=self.identity,
                clear_user_on_logout_failure=self.settings.clear_user_on_logout_failure,
            )
        return self._auth
    
    @property
    def resources(self) -> ResourceClient:
        if self._resources is None:
            self._resources = create_resource_client(
                settings=self.settings,
                session_resolver=self.session_resolver,
                identity=self.identity,
                transport=self._transport,
            )
        return self._resources
    
    @property
    def reporter(self) -> Reporter:
        if self._reporter is None:
            self._reporter = Reporter(sink=self._sink)
        return self._reporter
    
    async def start(self) -> "ClientContainer":
        """Run the auth bootstrap check."""
        await self.auth.bootstrap()
        return self
    
    async def aclose(self) -> None:
        if self._resources is not None:
            await self._resources.close()
            self._resources = None
    
    async def __aenter__(self) -> "ClientContainer":
        return await self.start()
    
    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
