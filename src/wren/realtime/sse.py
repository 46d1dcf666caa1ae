"""Server-Sent Events transport.

A streaming route's ``handle`` step returns a producer of
``MessageEvent`` values instead of a single response value. The
transport marks the response as an event stream, then writes each event
in production order and flushes it right away.

The producer decides when the stream ends: exhausting an async
generator, or closing the send side of an ``anyio`` memory object
stream, ends the response cleanly. A failed flush (client gone, write
deadline over) stops the loop at once; the producer is closed, not
drained.

Usage::

    async def ticks(ctx: RequestContext, _req: None):
        for _ in range(6):
            with anyio.move_on_after(ctx.remaining()) as scope:
                await anyio.sleep(1)
            if scope.cancelled_caught:
                return
            yield MessageEvent.of(datetime.now().isoformat())

    handler = EventStreamHandler(exact("POST", "/events"), parse_empty, ticks, timeout=10)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

from wren._internal.invoke import invoke
from wren.handlers.closure import ClosureRoute
from wren.handlers.contract import ParseFunc
from wren.realtime.events import MessageEvent

if TYPE_CHECKING:
    from wren.context import RequestContext
    from wren.http.request import Request
    from wren.http.sink import ResponseSink

logger = logging.getLogger("wren.server")

EventSource: TypeAlias = AsyncIterable[MessageEvent]
StreamGenerator: TypeAlias = Callable[["RequestContext", Any], EventSource | Awaitable[EventSource]]

Req = TypeVar("Req")

EVENT_STREAM_HEADERS: tuple[tuple[str, str], ...] = (
    ("Content-Type", "text/event-stream"),
    ("Cache-Control", "no-cache"),
    ("Connection", "keep-alive"),
)

# What a failed flush looks like: DeadlineExceeded is a TimeoutError, and
# ASGI servers raise OSError or RuntimeError once the client is gone.
_FLUSH_ERRORS = (OSError, RuntimeError)


async def stream_events(events: EventSource, sink: ResponseSink) -> bool:
    """Write *events* to *sink* as ``text/event-stream``.

    Returns ``True`` when the producer finished and the stream was closed,
    ``False`` when a flush failed. Flush failures are logged, never raised.
    An exception from the producer itself propagates to the caller.
    """
    for name, value in EVENT_STREAM_HEADERS:
        sink.set_header(name, value)
    try:
        if not await _flush(sink.start(200)):
            return False
        async for event in events:
            if not await _flush(sink.write(event.encode())):
                return False
        return await _flush(sink.end())
    finally:
        aclose = getattr(events, "aclose", None)
        if aclose is not None:
            await aclose()


async def _flush(pending: Awaitable[None]) -> bool:
    try:
        await pending
    except _FLUSH_ERRORS as exc:
        logger.error("unexpected failure on flush: %s", exc)
        return False
    return True


class EventStreamHandler(ClosureRoute[Req], Generic[Req]):
    """A handler whose response is a Server-Sent Events stream.

    Streams usually outlive the dispatcher's default budget, and the write
    path closes at the request deadline (plus grace). Give streaming
    routes their own, longer ``timeout``.
    """

    __slots__ = ("_generator",)

    def __init__(
        self,
        matcher: Callable[[Request], bool],
        parser: ParseFunc,
        generator: StreamGenerator,
        *,
        timeout: float = 0.0,
    ) -> None:
        super().__init__(matcher, parser, timeout=timeout)
        self._generator = generator

    async def handle(self, ctx: RequestContext, value: Req) -> EventSource:
        events = await invoke(self._generator, ctx, value)
        if not hasattr(events, "__aiter__"):
            msg = f"stream generator returned {type(events).__name__}, not an async iterable"
            raise TypeError(msg)
        return events

    async def respond(self, output: EventSource, sink: ResponseSink) -> None:
        await stream_events(output, sink)
