"""The dispatcher: an ASGI app that routes each request to one handler.

Per request:

1. CORS preflight short-circuit (when enabled).
2. First handler whose ``match`` succeeds, in registration order.
3. No match: 406 with a diagnostic body.
4. Effective timeout, request deadline, connection deadlines.
5. Bearer token from the token header into the ``RequestContext``.
6. Read the whole body under the read deadline; failure is a 500.
7. ``parse``; failure is a 400 with a diagnostic body.
8. ``handle`` under the deadline-bearing context; a ``CodedError`` is
   written as its status and message.
9. ``respond`` with the handler's output.

Each failure step is terminal for the request. Nothing here retries.
"""

from __future__ import annotations

import logging

import anyio

from wren._internal.asgi import Receive, Scope, Send
from wren.config import AppConfig
from wren.context import RequestContext, effective_timeout
from wren.errors import CodedError, DeadlineExceeded
from wren.handlers.contract import Handler
from wren.http.request import Request
from wren.http.sink import ResponseSink

logger = logging.getLogger("wren.server")

PREFLIGHT_METHOD = "OPTIONS"


class Dispatcher:
    """First-match request dispatcher.

    Handlers are fixed at construction. Registration order is priority:
    when two matchers overlap, the earlier handler always wins, and the
    later one is unreachable for those requests. That is a configuration
    hazard, not a runtime error.

    Usage::

        app = Dispatcher(echo, stream, config=AppConfig(default_timeout=2.0))
        run(app)
    """

    __slots__ = ("_handlers", "config")

    def __init__(self, *handlers: Handler, config: AppConfig | None = None) -> None:
        self._handlers: tuple[Handler, ...] = handlers
        self.config = config or AppConfig()

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return self._handlers

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _serve_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        await self.dispatch(Request.from_asgi(scope, receive), send)

    def find_handler(self, request: Request) -> Handler | None:
        # A linear scan is enough for the handler counts this is meant for.
        for handler in self._handlers:
            if handler.match(request):
                return handler
        return None

    async def dispatch(self, request: Request, send: Send) -> None:
        """Run the full request lifecycle against *send*."""
        cfg = self.config
        sink = ResponseSink(send)

        if cfg.allow_cors:
            sink.set_header("Access-Control-Allow-Origin", request.headers.get("origin", ""))
            if request.method == PREFLIGHT_METHOD:
                logger.warning("allow cors %s %s", request.method, request.url)
                sink.set_header("Access-Control-Allow-Methods", ",".join(cfg.cors_allow_methods))
                sink.set_header("Access-Control-Allow-Headers", ",".join(cfg.cors_allow_headers))
                sink.set_header("Access-Control-Max-Age", str(cfg.cors_max_age))
                await sink.send(202)
                return

        handler = self.find_handler(request)
        if handler is None:
            logger.warning("unmatched request %s %s", request.method, request.url)
            await sink.send(406, f"unsupported request on {request.method} {request.url}")
            return

        ctx = RequestContext.start(
            effective_timeout(handler, cfg.default_timeout),
            token=request.headers.get(cfg.token_header, ""),
        )
        # The write side gets a little longer than the request, so a
        # handler that hit its own deadline can still send that answer.
        sink.write_deadline = ctx.deadline + cfg.write_grace

        try:
            await self._run(handler, request, ctx, sink)
        except DeadlineExceeded:
            logger.error(
                "write deadline exceeded on %s %s after %gs",
                request.method,
                request.url,
                ctx.timeout,
            )
            raise

    async def _run(
        self,
        handler: Handler,
        request: Request,
        ctx: RequestContext,
        sink: ResponseSink,
    ) -> None:
        try:
            with anyio.fail_after(ctx.remaining()):
                data = await request.body()
        except Exception as exc:
            logger.error("unexpected failure on read %s %s: %r", request.method, request.url, exc)
            await sink.send(500)
            return

        try:
            value = await handler.parse(data, request.path)
        except Exception as exc:
            logger.warning("bad input format %s %s: %s", request.method, request.url, exc)
            await sink.send(400, f"can not parse req {request.method} {request.url} as {exc}")
            return

        try:
            output = await handler.handle(ctx, value)
        except CodedError as exc:
            await _send_coded_error(exc, sink)
            return
        except Exception:
            logger.exception("unexpected failure on handle %s %s", request.method, request.url)
            await sink.send(500, "Internal Server Error")
            return
        if isinstance(output, CodedError):
            await _send_coded_error(output, sink)
            return

        try:
            await handler.respond(output, sink)
        except DeadlineExceeded:
            raise
        except Exception:
            # The response may be half-written; all that is left is the log.
            logger.exception("unexpected failure on respond %s %s", request.method, request.url)
            if not sink.started:
                await sink.send(500)


async def _send_coded_error(exc: CodedError, sink: ResponseSink) -> None:
    if exc.is_client_fault:
        logger.warning("resp %s", exc)
    else:
        logger.error("resp %s", exc)
    await sink.send(exc.status, exc.message)


async def _serve_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge lifespan startup and shutdown; there is nothing to set up."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
