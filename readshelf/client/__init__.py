"""
Resource Client Module

Catalog operations (books, recommendations, reading lists, reviews)
with interchangeable live and mock implementations.
"""

from readshelf.client.base import ResourceClient
from readshelf.client.envelope import decode_envelope
from readshelf.client.http import HttpResourceClient
from readshelf.client.mock import MockResourceClient, SAMPLE_BOOKS
from readshelf.client.factory import create_resource_client

__all__ = [
    "ResourceClient",
    "HttpResourceClient",
    "MockResourceClient",
    "SAMPLE_BOOKS",
    "create_resource_client",
    "decode_envelope",
]
