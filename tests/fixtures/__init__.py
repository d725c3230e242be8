"""Test assets layer

Rules:
- no engine/network dependencies
- fakes stand in for upstream APIs
"""

from .fakes import FakeClock, FakeHttpClient, RecordedCall
from .webhook_payloads import FULL_PAYLOAD, MINIMAL_PAYLOAD

__all__ = [
    "FakeClock",
    "FakeHttpClient",
    "RecordedCall",
    "FULL_PAYLOAD",
    "MINIMAL_PAYLOAD",
]
