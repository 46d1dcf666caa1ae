"""Immutable HTTP request.

Frozen metadata plus async, cached body access. Matchers only look at
method, path, query, and headers; the dispatcher reads the body once,
under the read deadline, before parsing.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from wren._internal.asgi import Receive, Scope
from wren.http.headers import Headers
from wren.http.query import QueryParams


class ClientDisconnect(OSError):
    """The client went away before the request body was complete."""


@dataclass(frozen=True, slots=True)
class Request:
    """An inbound HTTP request."""

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: body cache (the dict is mutable, the field reference is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if "body" in self._cache:
            return self._cache["body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield body chunks as they arrive.

        Raises ``ClientDisconnect`` if the client hangs up mid-body.
        """
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                raise ClientDisconnect("client disconnected while sending the body")
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Request:
        """Build a body-less request from a method and URL.

        Handy for exercising matchers directly::

            assert exact("GET", "/echo")(Request.build("GET", "/echo"))
        """
        path, _, query_string = url.partition("?")
        raw_headers = tuple(
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        )
        return cls(
            method=method.upper(),
            path=path,
            headers=Headers(raw_headers),
            query=QueryParams(query_string.encode("latin-1")),
        )
