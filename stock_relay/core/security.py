"""
Webhook signature verification
"""

import base64
import hashlib
import hmac
from typing import Optional

from stock_relay.core.exceptions import WebhookSignatureException
from stock_relay.core.logging import logger


def compute_signature(secret: str, body: bytes) -> bytes:
    """HMAC-SHA256 digest of the raw request body"""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()


def _decode_signature(value: str) -> Optional[bytes]:
    """Decode a hex or base64 signature header value

    Accepts an optional ``sha256=`` prefix (GitHub style).
    """
    candidate = value.strip()
    if candidate.lower().startswith("sha256="):
        candidate = candidate[len("sha256="):]
    if not candidate:
        return None

    # sha256 hex digest is always 64 chars
    if len(candidate) == 64:
        try:
            return bytes.fromhex(candidate)
        except ValueError:
            pass
    try:
        return base64.b64decode(candidate, validate=True)
    except ValueError:
        return None


def verify_webhook_signature(secret: Optional[str], body: bytes, signature: Optional[str]) -> bool:
    """Verify a webhook body against its signature header

    Args:
        secret: shared secret; when empty, verification is disabled
        body: raw request body
        signature: header value sent by the caller

    Returns:
        True when the signature matches or verification is disabled

    Raises:
        WebhookSignatureException: missing or mismatched signature
    """
    if not secret:
        return True

    if not signature:
        logger.warning("[WEBHOOK] Signature header missing")
        raise WebhookSignatureException("missing signature header")

    provided = _decode_signature(signature)
    if provided is None:
        logger.warning("[WEBHOOK] Signature header is not hex or base64")
        raise WebhookSignatureException("malformed signature header")

    expected = compute_signature(secret, body)
    if not hmac.compare_digest(expected, provided):
        logger.warning("[WEBHOOK] Signature mismatch")
        raise WebhookSignatureException("signature mismatch")

    return True
