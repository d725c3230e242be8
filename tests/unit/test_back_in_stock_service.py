"""Back in Stock ingest tests (formatting + in-memory store)"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stock_relay.core.exceptions import ValidationException
from stock_relay.services.impl.back_in_stock_service import (
    BackInStockStore,
    format_notification,
    sample_notification,
)

from fixtures.webhook_payloads import FULL_PAYLOAD, MINIMAL_PAYLOAD

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestFormatNotification:
    def test_full_payload(self):
        row = format_notification(FULL_PAYLOAD, now=NOW)

        assert row["notification_id"] == 98765
        assert row["sku"] == "CWB2024-NERO-M"
        assert row["product_name"] == row["description"] == "Cappotto Wool Blend - Nero"
        assert row["variant_id"] == "12345"
        assert row["variant_title"] == "M / Nero"
        assert row["email"] == row["customer_email"] == "anna@example.com"
        assert row["first_name"] == "Anna"
        assert row["last_name"] == "Bianchi"
        assert row["requests"] == row["quantity"] == 2
        assert row["sent"] == 0
        assert row["created_at"] == row["last_added"] == "2024-03-01T10:00:00Z"
        assert row["option_1"] == "M"
        assert row["option_2"] == "Nero"
        assert row["unit_price"] == 289.00
        assert row["_original"] is FULL_PAYLOAD

    def test_defaults(self):
        row = format_notification(MINIMAL_PAYLOAD, now=NOW)

        assert row["sku"] == ""
        assert row["email"] == ""
        assert row["requests"] == 1
        assert row["quantity"] == 1
        assert row["unit_price"] == 0
        assert row["created_at"] == NOW.isoformat()
        assert row["last_added"] == NOW.isoformat()

    def test_falsy_values_use_defaults(self):
        payload = {"notification_id": 0, "quantity_required": 0, "product": {"price": 0, "sku": None}}
        row = format_notification(payload, now=NOW)

        assert row["notification_id"] == ""
        assert row["requests"] == 1
        assert row["unit_price"] == 0
        assert row["sku"] == ""

    def test_non_object_sections_ignored(self):
        row = format_notification({"product": "oops", "customer": ["x"]}, now=NOW)
        assert row["product_name"] == ""
        assert row["first_name"] == ""

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_rejects_non_object(self, payload):
        with pytest.raises(ValidationException):
            format_notification(payload)


class TestBackInStockStore:
    def test_newest_first(self):
        store = BackInStockStore(clock=lambda: NOW)
        store.ingest({"notification_id": 1})
        store.ingest({"notification_id": 2})

        assert [r["notification_id"] for r in store.items()] == [2, 1]
        assert store.count() == 2

    def test_last_received(self):
        moments = iter([NOW, NOW + timedelta(minutes=5)])
        store = BackInStockStore(clock=lambda: next(moments))
        assert store.last_received is None

        store.ingest(MINIMAL_PAYLOAD)
        store.ingest(MINIMAL_PAYLOAD)

        assert store.last_received == (NOW + timedelta(minutes=5)).isoformat()

    def test_clear_returns_previous_count(self):
        store = BackInStockStore()
        store.ingest(MINIMAL_PAYLOAD)
        store.ingest(FULL_PAYLOAD)

        assert store.clear() == 2
        assert store.count() == 0
        assert store.items() == []

    def test_bounded_drops_oldest(self):
        store = BackInStockStore(max_items=2)
        for i in range(1, 4):
            store.ingest({"notification_id": i})

        assert [r["notification_id"] for r in store.items()] == [3, 2]

    def test_invalid_payload_not_stored(self):
        store = BackInStockStore()
        with pytest.raises(ValidationException):
            store.ingest(["not", "an", "object"])
        assert store.count() == 0
        assert store.last_received is None

    def test_sample_notification_shape(self):
        payload = sample_notification(now=NOW)
        row = format_notification(payload, now=NOW)

        assert payload["notification_id"] == int(NOW.timestamp() * 1000)
        assert row["product_name"] == "Cappotto Wool Blend - Nero"
        assert row["email"] == "test@example.com"
