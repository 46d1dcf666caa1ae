"""HTTP primitives: the inbound ``Request`` and the outbound ``ResponseSink``."""

from wren.http.headers import Headers
from wren.http.query import QueryParams
from wren.http.request import ClientDisconnect, Request
from wren.http.sink import TEXT_CONTENT_TYPE, ResponseSink

__all__ = [
    "TEXT_CONTENT_TYPE",
    "ClientDisconnect",
    "Headers",
    "QueryParams",
    "Request",
    "ResponseSink",
]
