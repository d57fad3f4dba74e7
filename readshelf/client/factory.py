"""Resource client factory."""

from typing import Optional

import httpx
from loguru import logger

from readshelf.client.base import ResourceClient
from readshelf.client.http import HttpResourceClient
from readshelf.client.mock import MockResourceClient
from readshelf.config import DataMode, Settings
from readshelf.identity.base import IdentityProvider
from readshelf.session import SessionResolver


def create_resource_client(
    settings: Settings,
    session_resolver: SessionResolver,
    identity: Optional[IdentityProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ResourceClient:
    """
    Build the resource client for the configured data mode.
    
    Args:
        settings: Client settings
        session_resolver: Header source for the live client
        identity: Identity provider the mock client attributes data to
        transport: Optional httpx transport for the live client
        
    Returns:
        HttpResourceClient in live mode, MockResourceClient in mock mode
    """
    if settings.data_mode == DataMode.MOCK:
        logger.info("Using mock resource client")
        return MockResourceClient(identity=identity or session_resolver.identity)
    
    logger.info(f"Using live resource client at {settings.api_base_url}")
    return HttpResourceClient(
        base_url=settings.api_base_url,
        session_resolver=session_resolver,
        timeout=settings.request_timeout,
        transport=transport,
    )
