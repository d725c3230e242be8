"""FastAPI dependency providers

Per-app singletons live on ``app.state`` (see create_app); tests swap them through
``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from stock_relay.clients.feed_client import FeedClient
from stock_relay.clients.http_client import SharedHttpClient, get_shared_http_client
from stock_relay.core.config import Settings, get_settings
from stock_relay.core.exceptions import ConfigurationException
from stock_relay.services.impl.availability_service import AvailabilityService
from stock_relay.services.impl.back_in_stock_service import BackInStockStore
from stock_relay.services.impl.feed_cache import FeedCache, FeedService


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (create_app argument or environment)"""
    return getattr(request.app.state, "settings", None) or get_settings()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_http_client() -> SharedHttpClient:
    return get_shared_http_client()


def get_request_store(request: Request) -> BackInStockStore:
    """In-memory Back in Stock request log (one per app, built in create_app)"""
    return request.app.state.request_store


def get_feed_cache(request: Request) -> FeedCache:
    return request.app.state.feed_cache


def get_availability_service(
    settings: SettingsDep,
    http_client: Annotated[SharedHttpClient, Depends(get_http_client)],
) -> AvailabilityService:
    return AvailabilityService(settings=settings, http_client=http_client)


def get_feed_service(
    settings: SettingsDep,
    http_client: Annotated[SharedHttpClient, Depends(get_http_client)],
    cache: Annotated[FeedCache, Depends(get_feed_cache)],
) -> FeedService:
    """
    Raises:
        ConfigurationException: feed URL or token missing
    """
    if not settings.feed_url:
        raise ConfigurationException("feed_url")
    if not settings.feed_token:
        raise ConfigurationException("feed_token")

    client = FeedClient(
        http_client,
        url=settings.feed_url,
        token=settings.feed_token,
        token_param=settings.feed_token_param,
        timeout_s=settings.http_timeout_s,
    )
    return FeedService(client=client, cache=cache)
