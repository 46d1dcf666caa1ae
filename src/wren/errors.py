"""Wren exception hierarchy.

Shared across the dispatcher, handlers, and the connection layer so every
module raises and catches the same types.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when dispatcher or handler configuration is invalid.

    Always raised at construction time, before the first request is served.
    """


class DeadlineExceeded(WrenError, TimeoutError):
    """A connection-level read or write deadline has passed.

    Raised by ``ResponseSink`` when the write deadline (request deadline
    plus grace) is already over. The dispatcher lets it escape so the host
    server drops the connection.
    """


class CodedError(WrenError):
    """An application failure paired with the HTTP status to report.

    Raised (or returned) by handler business logic. The dispatcher writes
    ``status`` and the cause text verbatim as the body. A 4xx status is a
    client fault and is logged as a warning; anything else is a server
    fault and is logged as an error.

    ``status`` and ``cause`` are read-only. The instance itself stays an
    ordinary exception, so ``add_note`` and traceback chaining work.
    """

    def __init__(self, status: int, cause: BaseException | str = "") -> None:
        super().__init__(status, cause)
        self._status = status
        self._cause = cause

    @property
    def status(self) -> int:
        return self._status

    @property
    def cause(self) -> BaseException | str:
        return self._cause

    @property
    def message(self) -> str:
        """The cause text alone, as written into the response body."""
        return str(self._cause)

    @property
    def is_client_fault(self) -> bool:
        return is_client_fault(self._status)

    def __repr__(self) -> str:
        return f"CodedError(status={self._status!r}, cause={self._cause!r})"

    def __str__(self) -> str:
        return f"{self._status}: {self.message}"


def coded_error(status: int, fmt: str, *args: object) -> CodedError:
    """Build a ``CodedError`` from a printf-style message.

    Usage::

        raise coded_error(403, "invalid token %s", token)
    """
    return CodedError(status, fmt % args if args else fmt)


def is_client_fault(status: int) -> bool:
    """True if *status* is in the 4xx family."""
    return status // 100 == 4
