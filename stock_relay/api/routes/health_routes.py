"""Health check endpoints"""
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from stock_relay import __version__
from stock_relay.api.dependencies import SettingsDep, get_request_store
from stock_relay.schemas.webhook_schema import HealthData, HealthResponse, HealthServices
from stock_relay.services.impl.back_in_stock_service import BackInStockStore

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    settings: SettingsDep,
    store: Annotated[BackInStockStore, Depends(get_request_store)],
):
    """
    Health check

    - which upstream credentials are configured
    - request log size and last webhook time
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        services=HealthServices(
            shopify=settings.shopify_configured,
            feed=settings.feed_configured,
            webhook=True,
        ),
        data=HealthData(
            total_requests=store.count(),
            last_webhook=store.last_received,
        ),
    )


@router.get("/")
async def root(settings: SettingsDep):
    """Root endpoint"""
    return {
        "service": settings.api_title,
        "version": __version__,
        "docs": "/docs",
    }
