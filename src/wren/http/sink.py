"""Response sink: the per-request writer over ASGI ``send``.

A handler's ``respond`` step writes through a ``ResponseSink``. Headers
stay mutable until the response starts. Each ``write`` is one ASGI body
message, so it doubles as a flush for streaming responses.

Every send is bounded by the write deadline. Once that deadline is over,
sends raise ``DeadlineExceeded`` instead of reaching the client.
"""

import anyio

from wren._internal.asgi import Message, Send
from wren.errors import DeadlineExceeded

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def _body_allowed(status: int) -> bool:
    # RFC 9110: 1xx, 204, and 304 responses carry no body.
    return not (100 <= status < 200 or status in {204, 304})


def _as_bytes(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk


class ResponseSink:
    """Write one HTTP response, once.

    Usage for a single-body response::

        sink.set_header("Content-Type", "application/json")
        await sink.send(200, payload)

    Usage for a streamed response::

        await sink.start(200)
        for chunk in chunks:
            await sink.write(chunk)
        await sink.end()
    """

    __slots__ = ("_send", "finished", "headers", "started", "status", "write_deadline")

    def __init__(self, send: Send, *, write_deadline: float | None = None) -> None:
        self._send = send
        self.write_deadline = write_deadline
        self.headers: list[tuple[str, str]] = []
        self.status: int | None = None
        self.started = False
        self.finished = False

    def set_header(self, name: str, value: str) -> None:
        """Set *name* to *value*, replacing any earlier value."""
        if self.started:
            msg = f"cannot set header {name!r}: response already started"
            raise RuntimeError(msg)
        lowered = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != lowered]
        self.headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return None

    def _raw_headers(self, extra: tuple[tuple[str, str], ...] = ()) -> list[tuple[bytes, bytes]]:
        return [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (*self.headers, *extra)
        ]

    async def _emit(self, message: Message) -> None:
        if self.write_deadline is None:
            await self._send(message)
            return
        remaining = self.write_deadline - anyio.current_time()
        if remaining <= 0:
            raise DeadlineExceeded("write deadline exceeded")
        try:
            with anyio.fail_after(remaining):
                await self._send(message)
        except TimeoutError as exc:
            raise DeadlineExceeded("write deadline exceeded") from exc

    async def start(self, status: int = 200) -> None:
        """Send the status line and headers for a streamed body."""
        if self.started:
            msg = "response already started"
            raise RuntimeError(msg)
        await self._emit(
            {
                "type": "http.response.start",
                "status": status,
                "headers": self._raw_headers(),
            }
        )
        self.status = status
        self.started = True

    async def write(self, chunk: str | bytes) -> None:
        """Send one body chunk and keep the response open."""
        if not self.started:
            await self.start()
        await self._emit({"type": "http.response.body", "body": _as_bytes(chunk), "more_body": True})

    async def end(self) -> None:
        """Close the response body."""
        if not self.started:
            await self.start()
        await self._emit({"type": "http.response.body", "body": b"", "more_body": False})
        self.finished = True

    async def send(self, status: int, body: str | bytes = b"") -> None:
        """Send a complete response in one go, with Content-Length."""
        if self.started:
            msg = "response already started"
            raise RuntimeError(msg)
        payload = _as_bytes(body) if _body_allowed(status) else b""
        if payload and self.get_header("content-type") is None:
            self.set_header("Content-Type", TEXT_CONTENT_TYPE)
        await self._emit(
            {
                "type": "http.response.start",
                "status": status,
                "headers": self._raw_headers((("Content-Length", str(len(payload))),)),
            }
        )
        self.status = status
        self.started = True
        await self._emit({"type": "http.response.body", "body": payload})
        self.finished = True
