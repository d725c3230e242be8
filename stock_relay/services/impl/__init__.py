"""Services implementation package."""

from .availability_service import AvailabilityService
from .back_in_stock_service import BackInStockStore, format_notification, sample_notification
from .feed_cache import CacheEntry, FeedCache, FeedService

__all__ = [
    "AvailabilityService",
    "BackInStockStore",
    "format_notification",
    "sample_notification",
    "CacheEntry",
    "FeedCache",
    "FeedService",
]
