"""API endpoint package - export only."""

from .routes import (
    availability_router,
    build_webhook_router,
    feed_router,
    health_router,
    requests_router,
    test_router,
)

__all__ = [
    "availability_router",
    "build_webhook_router",
    "feed_router",
    "health_router",
    "requests_router",
    "test_router",
]
