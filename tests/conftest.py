"""Global test setup

Role:
- test environment variables
- shared fakes (clock, settings)
- fresh app with overridden dependencies per test

Forbidden:
- real network calls (Shopify, feed)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

from stock_relay.core.config import Settings  # noqa: E402
from stock_relay.services.impl.back_in_stock_service import BackInStockStore  # noqa: E402

from fixtures.fakes import FakeClock  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """Test environment variables (session wide)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with every upstream configured and no signature check"""
    return Settings(
        _env_file=None,
        shopify_store_url="test-store.myshopify.com",
        shopify_access_token="shpat_test",
        feed_url="https://feed.example.com/export.csv",
        feed_token="feed_test",
        webhook_secret=None,
        http_timeout_s=5.0,
    )


@pytest.fixture
def request_store() -> BackInStockStore:
    return BackInStockStore(max_items=100)
