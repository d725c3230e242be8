"""Availability Routes - Shopify product availability lookup

The HTTP layer only parses the body and delegates to AvailabilityService;
errors are turned into JSON by the app exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from stock_relay.api.body import read_json_body
from stock_relay.api.dependencies import SettingsDep, get_availability_service
from stock_relay.core.logging import logger
from stock_relay.schemas.availability_schema import AvailabilityResponse, ErrorResponse
from stock_relay.services.impl.availability_service import AvailabilityService

router = APIRouter(prefix="/api/shopify", tags=["availability"])


@router.post(
    "/products-availability",
    response_model=AvailabilityResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def products_availability(
    request: Request,
    settings: SettingsDep,
    service: Annotated[AvailabilityService, Depends(get_availability_service)],
):
    """Cross-reference submitted product names with the Shopify catalog

    Body: ``{"products": [{"name": "...", ...}, ...]}``

    Flow:
        1. Validate the product list (400)
        2. Check Shopify credentials (500)
        3. Walk every catalog page, matching as pages arrive
        4. Return results + stats
    """
    body = await read_json_body(request, settings.max_body_bytes)
    products = body.get("products") if isinstance(body, dict) else None

    report = await service.check_availability(products)

    if report.partial:
        logger.warning(f"[API] Returning partial availability report: {report.warning}")
    logger.info(
        f"[API] Availability done: matched={report.stats.matched_products}/"
        f"{report.stats.total_external_products}, rate={report.stats.match_rate}%"
    )
    return AvailabilityResponse.from_report(report)
