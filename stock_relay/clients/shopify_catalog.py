"""Shopify catalog paginator

Walks ``products.json`` page by page following the ``Link`` response header
(``<url>; rel="next"``). Pages are fetched strictly one after another since
each next URL comes from the previous response.
"""

from __future__ import annotations

import re
from typing import Any, AsyncIterator, Optional, Protocol

from stock_relay.core.exceptions import UpstreamTransportException
from stock_relay.core.logging import logger

from .http_client import HttpResponse

_LINK_URL_RE = re.compile(r"<(.+?)>")

SOURCE = "shopify"


class HttpGetter(Protocol):
    async def get(
        self,
        url: str,
        *,
        timeout_s: float,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        source: str = "upstream",
        raise_for_status: bool = True,
    ) -> HttpResponse: ...


def parse_next_link(link_header: Optional[str]) -> Optional[str]:
    """Extract the rel="next" URL from a Link header

    Args:
        link_header: raw header value, e.g.
            '<https://x/products.json?page_info=a>; rel="previous", <https://x/products.json?page_info=b>; rel="next"'

    Returns:
        next page URL, or None when there is no (well-formed) next entry
    """
    if not link_header:
        return None

    next_url: Optional[str] = None
    for entry in link_header.split(","):
        if 'rel="next"' not in entry:
            continue
        match = _LINK_URL_RE.search(entry)
        if match:
            next_url = match.group(1).strip()
    return next_url or None


class CatalogPaginator:
    """Fetches every product page of a Shopify store

    Not restartable: each iter_pages() call walks again from page 1.
    Any page failure ends the walk; pages already yielded stay yielded.
    """

    def __init__(
        self,
        http_client: HttpGetter,
        base_url: str,
        access_token: str,
        page_limit: int = 250,
        fields: str = "id,title,variants,images",
        timeout_s: float = 30.0,
    ):
        if not base_url:
            raise ValueError("base_url must not be empty")
        if not access_token:
            raise ValueError("access_token must not be empty")

        self.http_client = http_client
        self.base_url = base_url
        self.access_token = access_token
        self.page_limit = page_limit
        self.fields = fields
        self.timeout_s = timeout_s
        self.pages_fetched = 0

    def _headers(self) -> dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    async def _fetch_page(self, url: str, params: Optional[dict[str, Any]]) -> tuple[list[dict], Optional[str]]:
        response = await self.http_client.get(
            url,
            timeout_s=self.timeout_s,
            params=params,
            headers=self._headers(),
            source=SOURCE,
        )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamTransportException(SOURCE, f"invalid JSON body: {e}")

        products = body.get("products") if isinstance(body, dict) else None
        if not isinstance(products, list):
            raise UpstreamTransportException(SOURCE, "response has no 'products' list")

        return products, parse_next_link(response.headers.get("link"))

    async def iter_pages(self) -> AsyncIterator[list[dict]]:
        """Yield catalog products one page at a time

        Raises:
            UpstreamTransportException: a page fetch failed; raised after the
                pages fetched before it have been yielded
        """
        self.pages_fetched = 0
        url: Optional[str] = self.base_url
        # next links already encode limit/fields
        params: Optional[dict[str, Any]] = {"limit": self.page_limit, "fields": self.fields}

        while url:
            try:
                products, next_url = await self._fetch_page(url, params)
            except UpstreamTransportException as e:
                logger.error(
                    f"[CATALOG] Page {self.pages_fetched + 1} failed, aborting pagination: {e.message}"
                )
                raise

            self.pages_fetched += 1
            logger.debug(
                f"[CATALOG] Page {self.pages_fetched}: {len(products)} products, "
                f"next={'yes' if next_url else 'no'}"
            )
            yield products

            url = next_url
            params = None
