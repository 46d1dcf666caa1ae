"""The handler contract.

A handler is anything with four capabilities plus an optional timeout:

- ``match(request) -> bool``: cheap and side-effect free.
- ``await parse(data, path) -> value``: turn body bytes and path into the
  value ``handle`` expects. Raising means malformed input (400).
- ``await handle(ctx, value) -> output``: business logic. Raise
  ``CodedError`` for request-specific failures. ``ctx`` carries an
  advisory deadline the handler is expected to honour.
- ``await respond(output, sink)``: write the response. Nothing is
  reported upward; failures are logged, since the response may already
  have begun.
- ``timeout``: seconds; ``0`` inherits the dispatcher default.

No base class is required. The dispatcher checks the shape, not the
lineage. Concrete handlers are generic over their request and response
types (``ClosureHandler[Req, Resp]``); the dispatcher only stores the
erased ``Handler`` protocol and never casts back.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.context import RequestContext
    from wren.http.request import Request
    from wren.http.sink import ResponseSink

# Closures may be sync or async; ``invoke`` awaits when needed.
ParseFunc: TypeAlias = Callable[[bytes, str], Any]
HandleFunc: TypeAlias = Callable[["RequestContext", Any], Any | Awaitable[Any]]
FormatFunc: TypeAlias = Callable[[Any], bytes | str | Awaitable[bytes | str]]


class CanMatch(Protocol):
    def match(self, request: Request) -> bool: ...


class CanParse(Protocol):
    async def parse(self, data: bytes, path: str) -> Any: ...


class CanHandle(Protocol):
    async def handle(self, ctx: RequestContext, value: Any) -> Any: ...


class CanRespond(Protocol):
    async def respond(self, output: Any, sink: ResponseSink) -> None: ...


class HasOptionalTimeout(Protocol):
    @property
    def timeout(self) -> float: ...


@runtime_checkable
class Handler(CanMatch, CanParse, CanHandle, CanRespond, HasOptionalTimeout, Protocol):
    """Every capability the dispatcher needs from a route."""


def validate_timeout(timeout: float) -> float:
    """Reject negative per-handler timeouts at construction time."""
    if timeout < 0:
        msg = f"handler timeout must be >= 0, got {timeout!r}"
        raise ConfigurationError(msg)
    return timeout
