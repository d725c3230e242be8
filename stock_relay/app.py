"""FastAPI app factory"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stock_relay.core.config import Settings, settings as default_settings
from stock_relay.core.exceptions import PayloadTooLargeException, StockRelayException
from stock_relay.core.logging import logger
from stock_relay.api import (
    availability_router,
    build_webhook_router,
    feed_router,
    health_router,
    requests_router,
    test_router,
)
from stock_relay.schemas.availability_schema import ErrorResponse
from stock_relay.services.impl.back_in_stock_service import BackInStockStore
from stock_relay.services.impl.feed_cache import FeedCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    app_settings: Settings = app.state.settings
    logger.info("Starting application...")
    if not app_settings.shopify_configured:
        logger.warning("Shopify access token is not configured, availability lookups will fail")
    logger.info(f"Webhook ingress paths: {', '.join(app_settings.webhook_paths)}")
    yield
    logger.info("Shutting down application...")
    from stock_relay.clients.http_client import shutdown_shared_http_client
    await shutdown_shared_http_client()


def _error_response(exc: StockRelayException) -> JSONResponse:
    body = ErrorResponse(error=exc.message, error_code=exc.error_code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def handle_stock_relay_exception(request: Request, exc: StockRelayException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[API] {request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"[API] {request.method} {request.url.path} rejected: {exc}")
    return _error_response(exc)


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[API] {request.method} {request.url.path} crashed: {type(exc).__name__}", exc_info=True)
    body = ErrorResponse(error=str(exc) or type(exc).__name__, error_code="INTERNAL_ERROR")
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI app (factory pattern)

    Args:
        app_settings: settings to build routes from (default: environment)

    Returns:
        FastAPI app instance
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title=app_settings.api_title,
        description=app_settings.api_description,
        version=app_settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.request_store = BackInStockStore(max_items=app_settings.max_stored_requests)
    app.state.feed_cache = FeedCache(ttl_seconds=app_settings.feed_cache_ttl_s)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # declared length only; chunked bodies are capped while the routes stream them
    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > app_settings.max_body_bytes:
            return _error_response(PayloadTooLargeException(app_settings.max_body_bytes))
        return await call_next(request)

    app.add_exception_handler(StockRelayException, handle_stock_relay_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    # Routers
    app.include_router(health_router)
    app.include_router(build_webhook_router(app_settings.webhook_paths))
    app.include_router(requests_router)
    app.include_router(availability_router)
    app.include_router(feed_router)
    if app_settings.enable_test_routes:
        app.include_router(test_router)

    return app

# App instance (loaded by uvicorn)
app = create_app()
