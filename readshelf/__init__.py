"""
ReadShelf: client library for the ReadShelf book catalog.

Authentication state plus authenticated access to books, reading
lists, recommendations and reviews, against the live backend or an
in-memory mock catalog.
"""

from readshelf.auth import AuthState, AuthStateManager, AuthStatus
from readshelf.client import (
    HttpResourceClient,
    MockResourceClient,
    ResourceClient,
    create_resource_client,
)
from readshelf.config import DataMode, Settings, get_settings
from readshelf.container import ClientContainer
from readshelf.errors import (
    NotFoundError,
    ReadShelfError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from readshelf.reporting import CollectingSink, Reporter
from readshelf.session import SessionResolver

__version__ = "0.1.0"

__all__ = [
    "AuthState",
    "AuthStateManager",
    "AuthStatus",
    "ClientContainer",
    "CollectingSink",
    "DataMode",
    "HttpResourceClient",
    "MockResourceClient",
    "NotFoundError",
    "ReadShelfError",
    "Reporter",
    "ResourceClient",
    "ServerError",
    "SessionResolver",
    "Settings",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "create_resource_client",
    "get_settings",
]
