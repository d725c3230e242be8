"""Back-in-Stock relay and Shopify product availability service."""

__version__ = "1.0.0"
