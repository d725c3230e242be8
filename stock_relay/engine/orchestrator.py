"""Availability Orchestrator - drives catalog pages through a MatchSession

Flow:
1. Validate input and build the per-request MatchSession
2. Walk catalog pages in order, matching each page as it arrives
3. Stop on the first upstream failure (no retries)
4. Build the report
"""

from typing import Any

from stock_relay.core.exceptions import UpstreamTransportException
from stock_relay.core.logging import logger

from .matcher import MatchSession
from .report import build_report
from .result import AvailabilityReport


class AvailabilityOrchestrator:
    """Availability engine entry point

    Failure policy:
    - first page fails: the error propagates (nothing to report)
    - later page fails: partial report covering the pages already consumed
    """

    def __init__(self, paginator):
        """
        Args:
            paginator: object exposing an async ``iter_pages()`` generator
        """
        if not paginator:
            raise ValueError("paginator must not be None")
        self.paginator = paginator

    async def run(self, products: Any) -> AvailabilityReport:
        """Match external products against the whole catalog

        Args:
            products: request ``products`` list

        Returns:
            AvailabilityReport

        Raises:
            ValidationException: invalid product list
            UpstreamTransportException: the first catalog page failed
        """
        return await self.run_session(MatchSession.from_products(products))

    async def run_session(self, session: MatchSession) -> AvailabilityReport:
        """Run an already-validated MatchSession to completion"""
        logger.info(f"[MATCHER] Availability lookup started: {session.total_external} products")

        warning = None
        try:
            async for page in self.paginator.iter_pages():
                matched = session.consume_page(page)
                logger.debug(
                    f"[MATCHER] Page {session.pages_seen}: {len(page)} catalog products, {matched} matches"
                )
        except UpstreamTransportException as e:
            if session.pages_seen == 0:
                raise
            warning = e.message
            logger.error(
                f"[MATCHER] Pagination aborted after {session.pages_seen} pages, returning partial results: {e.message}"
            )

        logger.info(f"[MATCHER] Analyzed {session.total_catalog_products_seen} catalog products")
        logger.info(f"[MATCHER] Found {len(session.results)} matches")

        return build_report(
            session.results,
            total_external=session.total_external,
            total_catalog_seen=session.total_catalog_products_seen,
            unmatched_count=session.unmatched_count,
            warning=warning,
            pages_fetched=session.pages_seen,
        )
