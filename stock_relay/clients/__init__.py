"""Outbound API clients."""

from .http_client import HttpResponse, SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .shopify_catalog import CatalogPaginator, parse_next_link
from .feed_client import FeedClient

__all__ = [
    "HttpResponse",
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
    "CatalogPaginator",
    "parse_next_link",
    "FeedClient",
]
