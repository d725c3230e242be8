"""Back in Stock CSV feed endpoint (cached)"""
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from stock_relay.api.dependencies import get_feed_service
from stock_relay.core.logging import logger
from stock_relay.schemas.availability_schema import ErrorResponse
from stock_relay.schemas.webhook_schema import FeedResponse
from stock_relay.services.impl.feed_cache import FeedService

router = APIRouter(prefix="/api", tags=["feed"])


@router.get(
    "/back-in-stock-feed",
    response_model=FeedResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_feed(service: Annotated[FeedService, Depends(get_feed_service)]):
    """Feed rows, served from cache while the TTL holds"""
    rows, cached = await service.get_rows()
    logger.info(f"[API] Returning {len(rows)} feed rows (cached={cached})")
    return FeedResponse(
        data=rows,
        source="feed-cache" if cached else "feed",
        cached=cached,
        timestamp=datetime.now(timezone.utc),
        count=len(rows),
    )
