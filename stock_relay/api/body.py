"""Request body helpers

The app middleware rejects oversized bodies by Content-Length; chunked
uploads carry no length, so the limit is enforced again while streaming.
"""
import json
from typing import Any

from fastapi import Request

from stock_relay.core.exceptions import PayloadTooLargeException, ValidationException


async def read_body(request: Request, limit_bytes: int) -> bytes:
    """Raw request body, read chunk by chunk up to ``limit_bytes``

    Raises:
        PayloadTooLargeException: body grew past the limit
    """
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit_bytes:
            raise PayloadTooLargeException(limit_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def parse_json_body(raw: bytes) -> Any:
    """Parsed JSON body, ``{}`` when the body is empty

    Raises:
        ValidationException: body is not valid JSON
    """
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationException("body", "must be valid JSON")


async def read_json_body(request: Request, limit_bytes: int) -> Any:
    return parse_json_body(await read_body(request, limit_bytes))
