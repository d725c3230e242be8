"""API routes package."""

from .availability_routes import router as availability_router
from .feed_routes import router as feed_router
from .health_routes import router as health_router
from .webhook_routes import build_webhook_router, router as requests_router, test_router

__all__ = [
    "availability_router",
    "feed_router",
    "health_router",
    "requests_router",
    "test_router",
    "build_webhook_router",
]
