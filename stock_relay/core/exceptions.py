"""Custom exceptions (structured hierarchy)"""
from typing import Any, Optional


class StockRelayException(Exception):
    """Base exception - parent of every custom exception"""

    status_code: int = 500

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# Validation
class ValidationException(StockRelayException):
    """Malformed or missing input"""

    status_code = 400

    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                         details or {"field": field, "reason": reason})


class PayloadTooLargeException(ValidationException):
    """Request body over the configured limit"""

    status_code = 413

    def __init__(self, limit_bytes: int, details: Optional[dict[str, Any]] = None):
        super().__init__("body", f"request body exceeds {limit_bytes} bytes",
                         details or {"limit_bytes": limit_bytes})
        self.error_code = "PAYLOAD_TOO_LARGE"


# Deployment
class ConfigurationException(StockRelayException):
    """Required setting or credential is absent"""

    status_code = 500

    def __init__(self, setting: str, details: Optional[dict[str, Any]] = None):
        message = f"Required setting '{setting}' is not configured"
        super().__init__(message, "CONFIGURATION_ERROR", details or {"setting": setting})


# Upstream APIs
class UpstreamTransportException(StockRelayException):
    """Network or HTTP failure while talking to an upstream API"""

    status_code = 500

    def __init__(self, source: str, reason: str, error_code: str = "UPSTREAM_ERROR",
                 details: Optional[dict[str, Any]] = None):
        message = f"{source} request failed: {reason}"
        super().__init__(message, error_code or "UPSTREAM_ERROR",
                         details or {"source": source, "reason": reason})
        self.source = source
        self.reason = reason


class NetworkTimeoutException(UpstreamTransportException):
    """Upstream call exceeded its time budget"""

    def __init__(self, operation: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        super().__init__(operation, f"timed out after {timeout_s}s", "NETWORK_TIMEOUT",
                         details or {"operation": operation, "timeout_s": timeout_s})


# Webhook
class WebhookSignatureException(StockRelayException):
    """Webhook signature missing or invalid"""

    status_code = 401

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Webhook signature rejected: {reason}"
        super().__init__(message, "INVALID_SIGNATURE", details or {"reason": reason})
