"""Test utilities for wren dispatchers.

Drive a ``Dispatcher`` in-process through ASGI, no sockets::

    from wren.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/echo")
        assert response.status == 200
"""

from wren.testing.client import ConnectionDropped, TestClient, TestResponse
from wren.testing.sse import SSETestResult, parse_sse_frames

__all__ = [
    "ConnectionDropped",
    "SSETestResult",
    "TestClient",
    "TestResponse",
    "parse_sse_frames",
]
