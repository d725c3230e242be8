"""Back in Stock ingest - webhook payload formatting and in-memory request store"""
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from stock_relay.core.exceptions import ValidationException
from stock_relay.core.logging import logger


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    value = payload.get(name)
    return value if isinstance(value, dict) else {}


def format_notification(payload: Any, now: Optional[datetime] = None) -> dict[str, Any]:
    """Map a Back in Stock webhook payload to the dashboard row shape

    Falsy source values fall back to the field default, aliases
    (description, customer_email, quantity, last_added) repeat their
    primary field for older dashboard builds.

    Args:
        payload: parsed webhook JSON body
        now: timestamp used when the payload has no created_at

    Returns:
        dashboard row dict, raw payload kept under ``_original``

    Raises:
        ValidationException: payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise ValidationException("body", "webhook payload must be a JSON object")

    product = _section(payload, "product")
    customer = _section(payload, "customer")
    timestamp = (now or utc_now()).isoformat()

    quantity = payload.get("quantity_required") or 1
    created_at = payload.get("created_at") or timestamp
    title = product.get("product_title") or ""
    email = customer.get("email") or ""

    return {
        "notification_id": payload.get("notification_id") or "",
        "sku": product.get("sku") or "",
        "product_name": title,
        "description": title,
        "variant_id": product.get("variant_id") or "",
        "variant_title": product.get("variant_title") or "",
        "email": email,
        "customer_email": email,
        "first_name": customer.get("first_name") or "",
        "last_name": customer.get("last_name") or "",
        "requests": quantity,
        "quantity": quantity,
        "sent": 0,
        "created_at": created_at,
        "last_added": created_at,
        "option_1": product.get("option1") or "",
        "option_2": product.get("option2") or "",
        "unit_price": product.get("price") or 0,
        "_original": payload,
    }


class BackInStockStore:
    """In-memory request log, newest first

    Process-local and lost on restart. Bounded: once ``max_items`` is
    reached the oldest rows are dropped.
    """

    def __init__(self, max_items: int = 10000, clock: Callable[[], datetime] = utc_now):
        self._items: deque[dict[str, Any]] = deque(maxlen=max_items)
        self._clock = clock
        self.last_received: Optional[str] = None

    def ingest(self, payload: Any) -> dict[str, Any]:
        """Format a webhook payload and store it

        Returns:
            the stored dashboard row
        """
        now = self._clock()
        row = format_notification(payload, now=now)
        self._items.appendleft(row)
        self.last_received = now.isoformat()
        logger.info(f"[WEBHOOK] Request stored, total requests: {len(self._items)}")
        return row

    def items(self) -> list[dict[str, Any]]:
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def clear(self) -> int:
        """Drop every stored row

        Returns:
            number of rows removed
        """
        previous = len(self._items)
        self._items.clear()
        logger.info(f"[WEBHOOK] Cleared {previous} records")
        return previous


def sample_notification(now: Optional[datetime] = None) -> dict[str, Any]:
    """Built-in payload used by the test webhook route"""
    moment = now or utc_now()
    return {
        "notification_id": int(moment.timestamp() * 1000),
        "product": {
            "product_title": "Cappotto Wool Blend - Nero",
            "sku": "CWB2024-NERO-M",
            "variant_id": "12345",
            "variant_title": "M / Nero",
            "option1": "M",
            "option2": "Nero",
            "price": 289.00,
        },
        "customer": {
            "email": "test@example.com",
            "first_name": "Mario",
            "last_name": "Rossi",
        },
        "quantity_required": 1,
        "created_at": moment.isoformat(),
    }
