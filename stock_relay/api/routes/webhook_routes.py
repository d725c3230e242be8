"""Back in Stock webhook ingress and request log endpoints"""
from datetime import datetime, timezone
from typing import Annotated, Iterable

from fastapi import APIRouter, Depends, Request

from stock_relay.api.dependencies import SettingsDep, get_request_store
from stock_relay.api.body import parse_json_body, read_body
from stock_relay.core.logging import logger
from stock_relay.core.security import verify_webhook_signature
from stock_relay.schemas.webhook_schema import (
    ClearResponse,
    RequestCountResponse,
    RequestListResponse,
    SampleWebhookResponse,
    WebhookAck,
)
from stock_relay.services.impl.back_in_stock_service import BackInStockStore, sample_notification

StoreDep = Annotated[BackInStockStore, Depends(get_request_store)]

router = APIRouter(prefix="/api", tags=["back-in-stock"])
test_router = APIRouter(prefix="/api/test", tags=["test"])


async def receive_webhook(request: Request, settings: SettingsDep, store: StoreDep) -> WebhookAck:
    """Receive a Back in Stock notification

    Verifies the signature when a secret is configured, stores the
    formatted row and acknowledges with 200.
    """
    raw = await read_body(request, settings.max_body_bytes)
    verify_webhook_signature(
        settings.webhook_secret,
        raw,
        request.headers.get(settings.webhook_signature_header),
    )

    payload = parse_json_body(raw)
    logger.info(f"[WEBHOOK] Notification received on {request.url.path}")
    logger.debug(f"[WEBHOOK] Payload: {payload}")

    store.ingest(payload)

    return WebhookAck(timestamp=datetime.now(timezone.utc), total_requests=store.count())


def build_webhook_router(paths: Iterable[str]) -> APIRouter:
    """Single webhook ingress exposed under every configured path alias"""
    webhook_router = APIRouter(tags=["webhook"])
    for path in paths:
        webhook_router.add_api_route(
            path,
            receive_webhook,
            methods=["POST"],
            response_model=WebhookAck,
        )
    return webhook_router


@router.get("/back-in-stock-requests", response_model=RequestListResponse)
async def list_requests(store: StoreDep):
    """Stored requests, newest first, in the dashboard format"""
    data = store.items()
    logger.info(f"[API] Returning {len(data)} back in stock requests")
    return RequestListResponse(data=data, timestamp=datetime.now(timezone.utc), count=len(data))


@router.get("/back-in-stock-requests/count", response_model=RequestCountResponse)
async def count_requests(store: StoreDep):
    """Request count for the dashboard badge"""
    return RequestCountResponse(count=store.count(), last_update=store.last_received)


@router.delete("/back-in-stock-requests/clear", response_model=ClearResponse)
async def clear_requests(store: StoreDep):
    """Drop every stored request (testing)"""
    previous = store.clear()
    return ClearResponse(message=f"Cleared {previous} requests", timestamp=datetime.now(timezone.utc))


@test_router.post("/send-webhook", response_model=SampleWebhookResponse)
async def send_test_webhook(store: StoreDep):
    """Ingest a built-in sample notification through the webhook path"""
    payload = sample_notification()
    store.ingest(payload)
    logger.info("[WEBHOOK] Test notification ingested")
    return SampleWebhookResponse(data=payload)
