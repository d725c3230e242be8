"""Availability service - request-level entry point for Shopify lookups"""
from typing import Any

from stock_relay.clients.shopify_catalog import CatalogPaginator
from stock_relay.core.config import Settings
from stock_relay.core.exceptions import ConfigurationException
from stock_relay.core.logging import logger
from stock_relay.engine import AvailabilityOrchestrator, AvailabilityReport, MatchSession


class AvailabilityService:
    """Builds a fresh paginator/orchestrator per request"""

    def __init__(self, settings: Settings, http_client):
        self.settings = settings
        self.http_client = http_client

    def build_paginator(self) -> CatalogPaginator:
        """
        Raises:
            ConfigurationException: Shopify access token missing
        """
        if not self.settings.shopify_access_token:
            logger.error("[API] Shopify access token is not configured")
            raise ConfigurationException("shopify_access_token")

        return CatalogPaginator(
            http_client=self.http_client,
            base_url=self.settings.shopify_products_url,
            access_token=self.settings.shopify_access_token,
            page_limit=self.settings.shopify_page_limit,
            fields=self.settings.shopify_product_fields,
            timeout_s=self.settings.http_timeout_s,
        )

    async def check_availability(self, products: Any) -> AvailabilityReport:
        """Cross-reference external product names with the Shopify catalog

        Input is validated before configuration so a bad request is a 400
        even on a misconfigured deployment.

        Args:
            products: request ``products`` value

        Returns:
            AvailabilityReport

        Raises:
            ValidationException: invalid product list
            ConfigurationException: Shopify access token missing
            UpstreamTransportException: catalog unreachable on the first page
        """
        session = MatchSession.from_products(products)
        orchestrator = AvailabilityOrchestrator(self.build_paginator())
        logger.info(f"[API] Availability search for {len(products)} products")
        return await orchestrator.run_session(session)
