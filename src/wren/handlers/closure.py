"""Handlers built from closures.

``ClosureHandler`` satisfies the handler contract with five plain
callables: a matcher, a parser, the business logic, a formatter, and a
content type. Parsers, handlers, and formatters may be sync or async.

Usage::

    echo = ClosureHandler(
        exact("GET", "/echo"),
        parse_raw,
        lambda ctx, req: f"path={req.path}",
        format_text,
        "text/plain; charset=utf-8",
    )
"""

from __future__ import annotations

import dataclasses
import datetime
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from wren._internal.invoke import invoke
from wren.handlers.contract import FormatFunc, HandleFunc, ParseFunc, validate_timeout

if TYPE_CHECKING:
    from wren.context import RequestContext
    from wren.http.request import Request
    from wren.http.sink import ResponseSink

logger = logging.getLogger("wren.server")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

Req = TypeVar("Req")
Resp = TypeVar("Resp")
T = TypeVar("T")


class ClosureRoute(Generic[Req]):
    """Match and parse from closures; shared by every closure-based handler."""

    __slots__ = ("_matcher", "_parser", "timeout")

    def __init__(
        self,
        matcher: Callable[[Request], bool],
        parser: ParseFunc,
        *,
        timeout: float = 0.0,
    ) -> None:
        self._matcher = matcher
        self._parser = parser
        self.timeout = validate_timeout(timeout)

    def match(self, request: Request) -> bool:
        return self._matcher(request)

    async def parse(self, data: bytes, path: str) -> Req:
        return await invoke(self._parser, data, path)


class ClosureHandler(ClosureRoute[Req], Generic[Req, Resp]):
    """A handler whose every capability is a user-supplied closure."""

    __slots__ = ("_formatter", "_handler", "content_type")

    def __init__(
        self,
        matcher: Callable[[Request], bool],
        parser: ParseFunc,
        handler: HandleFunc,
        formatter: FormatFunc,
        content_type: str,
        *,
        timeout: float = 0.0,
    ) -> None:
        super().__init__(matcher, parser, timeout=timeout)
        self._handler = handler
        self._formatter = formatter
        self.content_type = content_type

    async def handle(self, ctx: RequestContext, value: Req) -> Resp:
        return await invoke(self._handler, ctx, value)

    async def format(self, output: Resp) -> bytes:
        data = await invoke(self._formatter, output)
        if isinstance(data, str):
            return data.encode("utf-8")
        return data

    async def respond(self, output: Resp, sink: ResponseSink) -> None:
        """Format *output* and send it; a formatter failure becomes a bare 500."""
        try:
            data = await self.format(output)
        except Exception:
            logger.exception("unexpected failure on format")
            await sink.send(500)
            return
        sink.set_header("Content-Type", self.content_type)
        await sink.send(200, data)


@dataclass(frozen=True, slots=True)
class Empty:
    """Request type meaning "no body". ``json_parser(Empty)`` is ``parse_empty``."""


@dataclass(frozen=True, slots=True)
class RawRequest:
    """Body bytes and path, untouched."""

    data: bytes
    path: str


def parse_empty(_data: bytes, _path: str) -> None:
    return None


def parse_raw(data: bytes, path: str) -> RawRequest:
    return RawRequest(data=data, path=path)


def format_empty(_output: object) -> bytes:
    return b""


def format_text(output: object) -> bytes:
    return str(output).encode("utf-8")


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def format_json(output: object) -> bytes:
    """Encode *output* as compact JSON; dataclasses become objects.

    Dates and times become ISO strings and bytes are decoded as UTF-8.
    Anything else JSON has no form for raises ``TypeError``, which
    ``ClosureHandler.respond`` turns into a 500.
    """
    return json.dumps(output, default=_json_default, separators=(",", ":")).encode("utf-8")


def json_parser(request_type: type[T]) -> ParseFunc:
    """Parser that decodes a JSON body into *request_type*.

    Dataclasses are built from the matching keys of a JSON object; unknown
    keys are ignored and missing required fields are a parse error. Other
    types must match the decoded value exactly (``dict``, ``list``, ``int``,
    ...). ``Empty`` skips the body altogether.
    """
    if request_type is Empty:
        return parse_empty

    def parser(data: bytes, _path: str) -> T:
        payload = json.loads(data)
        if dataclasses.is_dataclass(request_type):
            if not isinstance(payload, dict):
                msg = f"expected a JSON object for {request_type.__name__}"
                raise ValueError(msg)
            names = {f.name for f in dataclasses.fields(request_type) if f.init}
            return request_type(**{k: v for k, v in payload.items() if k in names})
        if not isinstance(payload, request_type):
            msg = f"expected {request_type.__name__}, got {type(payload).__name__}"
            raise ValueError(msg)
        return payload

    return parser


def json_handler(
    matcher: Callable[[Request], bool],
    request_type: type[Req],
    handler: Callable[[RequestContext, Req], Any],
    *,
    timeout: float = 0.0,
) -> ClosureHandler[Req, Resp]:
    """A ``ClosureHandler`` that speaks JSON both ways."""
    return ClosureHandler(
        matcher,
        json_parser(request_type),
        handler,
        format_json,
        JSON_CONTENT_TYPE,
        timeout=timeout,
    )
