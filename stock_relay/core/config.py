"""Settings management - environment loading and validation"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Shopify
    shopify_store_url: str = "loft-73.myshopify.com"
    shopify_access_token: Optional[str] = None
    shopify_api_version: str = "2024-01"
    shopify_page_limit: int = 250
    shopify_product_fields: str = "id,title,variants,images"

    # Per-call upper bound for every outbound HTTP request
    http_timeout_s: float = 30.0

    # Back in Stock CSV feed (peripheral)
    feed_url: str = ""
    feed_token: Optional[str] = None
    feed_token_param: str = "token"
    feed_cache_ttl_s: int = 240

    # Webhook ingress
    webhook_paths: list[str] = [
        "/api/webhook/back-in-stock",
        "/api/webhooks/back-in-stock",
        "/webhook/back-in-stock",
    ]
    webhook_secret: Optional[str] = None
    webhook_signature_header: str = "X-Webhook-Signature"
    max_stored_requests: int = 10000

    # API
    api_title: str = "Back in Stock Relay"
    api_version: str = "1.0.0"
    api_description: str = "Back in Stock webhook relay and Shopify availability lookup."
    cors_origins: list[str] = ["*"]
    max_body_mb: int = 50
    enable_test_routes: bool = True
    port: int = 3001

    # Logging
    log_level: str = "INFO"

    @field_validator("shopify_page_limit")
    @classmethod
    def validate_page_limit(cls, v: int) -> int:
        # Shopify REST caps page size at 250
        if v <= 0 or v > 250:
            raise ValueError("shopify_page_limit must be between 1 and 250")
        return v

    @field_validator("http_timeout_s")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_s must be positive")
        return v

    @field_validator("feed_cache_ttl_s", "max_stored_requests", "max_body_mb")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("webhook_paths")
    @classmethod
    def validate_webhook_paths(cls, v: list[str]) -> list[str]:
        paths = [p.strip() for p in v if p and p.strip()]
        if not paths:
            raise ValueError("webhook_paths must contain at least one path")
        for path in paths:
            if not path.startswith("/"):
                raise ValueError(f"webhook path must start with '/': {path}")
        # dedupe, keep order
        return list(dict.fromkeys(paths))

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shopify_access_token)

    @property
    def feed_configured(self) -> bool:
        return bool(self.feed_url and self.feed_token)

    @property
    def shopify_products_url(self) -> str:
        """Admin REST products endpoint for the configured store"""
        host = self.shopify_store_url.strip()
        for scheme in ("https://", "http://"):
            if host.startswith(scheme):
                host = host[len(scheme):]
        host = host.rstrip("/")
        return f"https://{host}/admin/api/{self.shopify_api_version}/products.json"

    @property
    def max_body_bytes(self) -> int:
        return self.max_body_mb * 1024 * 1024


settings = Settings()


def get_settings() -> Settings:
    """Settings dependency (override in tests)"""
    return settings
