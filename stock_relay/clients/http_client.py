"""Shared HTTP client (curl_cffi)

- One AsyncSession per process so Shopify/feed calls reuse TLS connections.
- Transport errors, timeouts and HTTP error statuses are raised as
  UpstreamTransportException; callers decide whether to abort.
- Closed from the app lifespan via shutdown_shared_http_client().
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from curl_cffi.requests import AsyncSession

from stock_relay.core.config import settings
from stock_relay.core.exceptions import NetworkTimeoutException, UpstreamTransportException
from stock_relay.core.logging import logger, sanitize_for_log


@dataclass
class HttpResponse:
    """Minimal response snapshot; header names are lower-cased"""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    def json(self) -> Any:
        return json.loads(self.text)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                headers=self.default_headers(),
                allow_redirects=True,
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": f"stock-relay/{settings.api_version}",
            "Accept": "application/json, text/csv;q=0.9, */*;q=0.8",
        }

    async def get(
        self,
        url: str,
        *,
        timeout_s: float,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        source: str = "upstream",
        raise_for_status: bool = True,
    ) -> HttpResponse:
        """GET a URL and return a snapshot of the response

        Args:
            url: absolute URL
            timeout_s: per-call upper bound (seconds)
            params: query parameters, or None to send the URL as-is
            headers: extra request headers
            source: upstream name used in error messages
            raise_for_status: raise on HTTP status >= 400

        Raises:
            NetworkTimeoutException: call exceeded timeout_s
            UpstreamTransportException: transport failure or error status
        """
        sess = await self._ensure_session()
        try:
            resp = await asyncio.wait_for(
                sess.get(url, params=params, headers=headers, timeout=timeout_s),
                timeout=timeout_s,
            )
        except asyncio.TimeoutError:
            logger.info(f"[HTTP_CLIENT] GET timed out after {timeout_s}s: source={source} url={sanitize_for_log(url, 200)}")
            raise NetworkTimeoutException(source, timeout_s)
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed: source={source} url={sanitize_for_log(url, 200)} {type(e).__name__}: {e}")
            raise UpstreamTransportException(source, f"{type(e).__name__}: {e}")

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        response = HttpResponse(
            status_code=status,
            headers={str(k).lower(): str(v) for k, v in (resp.headers or {}).items()},
            text=text,
        )

        if raise_for_status and not response.ok:
            raise UpstreamTransportException(
                source,
                f"HTTP {status}",
                details={"source": source, "status_code": status},
            )
        return response

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.warning(f"[HTTP_CLIENT] Session close failed: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
