"""Back in Stock CSV feed client

Auth order:
1. ``Authorization: Bearer <token>``
2. token embedded in the URL query (single fallback attempt)
"""

from __future__ import annotations

import csv
import io
from typing import Any, Dict, List
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from stock_relay.core.exceptions import UpstreamTransportException
from stock_relay.core.logging import logger

SOURCE = "feed"


def embed_token(url: str, token: str, param: str = "token") -> str:
    """Return ``url`` with ``param=token`` set in its query string"""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != param]
    query.append((param, token))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def parse_csv(text: str) -> List[Dict[str, Any]]:
    """Parse CSV text with a header row into a list of dicts"""
    if not text or not text.strip():
        return []
    # strip UTF-8 BOM some exporters prepend
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    return [dict(row) for row in reader]


class FeedClient:
    """Fetches the Back in Stock CSV export"""

    def __init__(self, http_client, url: str, token: str, token_param: str = "token", timeout_s: float = 30.0):
        if not url:
            raise ValueError("url must not be empty")
        if not token:
            raise ValueError("token must not be empty")
        self.http_client = http_client
        self.url = url
        self.token = token
        self.token_param = token_param
        self.timeout_s = timeout_s

    async def fetch_text(self) -> str:
        """Download the raw CSV body

        Raises:
            UpstreamTransportException: both auth methods failed
        """
        try:
            response = await self.http_client.get(
                self.url,
                timeout_s=self.timeout_s,
                headers={"Authorization": f"Bearer {self.token}"},
                source=SOURCE,
            )
            return response.text
        except UpstreamTransportException as e:
            logger.warning(f"[FEED] Bearer auth failed ({e.reason}), retrying with URL token")

        try:
            response = await self.http_client.get(
                embed_token(self.url, self.token, self.token_param),
                timeout_s=self.timeout_s,
                source=SOURCE,
            )
        except UpstreamTransportException as e:
            logger.error(f"[FEED] URL token auth failed: {e.reason}")
            raise
        return response.text

    async def fetch_rows(self) -> List[Dict[str, Any]]:
        rows = parse_csv(await self.fetch_text())
        logger.info(f"[FEED] Fetched {len(rows)} rows")
        return rows
