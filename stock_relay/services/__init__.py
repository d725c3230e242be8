"""Business logic services - export only."""

from .impl import AvailabilityService, BackInStockStore, FeedCache, FeedService

__all__ = ["AvailabilityService", "BackInStockStore", "FeedCache", "FeedService"]
