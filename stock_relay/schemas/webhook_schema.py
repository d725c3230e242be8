"""Pydantic schemas - Back in Stock webhook relay, feed and health"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class BackInStockRequest(BaseModel):
    """Dashboard row built from one webhook notification"""
    model_config = ConfigDict(populate_by_name=True)

    notification_id: Any = ""
    sku: Any = ""
    product_name: Any = ""
    description: Any = ""
    variant_id: Any = ""
    variant_title: Any = ""
    email: Any = ""
    customer_email: Any = ""
    first_name: Any = ""
    last_name: Any = ""
    requests: Any = 1
    quantity: Any = 1
    sent: int = 0
    created_at: Any = ""
    last_added: Any = ""
    option_1: Any = ""
    option_2: Any = ""
    unit_price: Any = 0
    original: dict[str, Any] = Field(default_factory=dict, alias="_original", description="Raw webhook payload")


class WebhookAck(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Webhook received and processed"
    timestamp: datetime
    total_requests: int = Field(..., alias="totalRequests")


class RequestListResponse(BaseModel):
    success: bool = True
    data: List[BackInStockRequest]
    format: str = "json"
    source: str = "webhook-memory"
    timestamp: datetime
    count: int


class RequestCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    count: int
    last_update: Optional[str] = Field(None, alias="lastUpdate")


class ClearResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime


class SampleWebhookResponse(BaseModel):
    success: bool = True
    message: str = "Test webhook sent"
    data: dict[str, Any]


class FeedResponse(BaseModel):
    success: bool = True
    data: List[dict[str, Any]]
    format: str = "csv"
    source: str = "feed"
    cached: bool
    timestamp: datetime
    count: int


class HealthServices(BaseModel):
    shopify: bool
    feed: bool
    webhook: bool = True


class HealthData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_requests: int = Field(..., alias="totalRequests")
    last_webhook: Optional[str] = Field(None, alias="lastWebhook")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: datetime
    version: str
    services: HealthServices
    data: HealthData
