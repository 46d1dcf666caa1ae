"""Per-request scope handed to business logic.

A ``RequestContext`` carries the request deadline and the bearer token.
Cancellation is advisory: the dispatcher never interrupts a handler.
Handlers read ``expired``/``remaining()`` or call ``check()``, and
streaming producers await ``wait()`` alongside their own sources.
"""

from __future__ import annotations

from dataclasses import dataclass

import anyio

from wren.config import DEFAULT_TIMEOUT
from wren.errors import CodedError


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Deadline and ambient values for one request.

    ``deadline`` is an absolute time on the ``anyio.current_time()`` clock.
    ``token`` is the value of the configured token header, or ``""``.
    """

    deadline: float
    timeout: float
    token: str = ""

    @classmethod
    def start(cls, timeout: float, token: str = "") -> RequestContext:
        """Open a context whose deadline is *timeout* seconds from now."""
        return cls(deadline=anyio.current_time() + timeout, timeout=timeout, token=token)

    @property
    def cause(self) -> str:
        return f"handler exceed timeout {self.timeout:g}s"

    @property
    def expired(self) -> bool:
        return anyio.current_time() >= self.deadline

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(self.deadline - anyio.current_time(), 0.0)

    def check(self) -> None:
        """Raise a 500 ``CodedError`` if the deadline has passed."""
        if self.expired:
            raise CodedError(500, self.cause)

    async def wait(self) -> None:
        """Return once the deadline has passed."""
        await anyio.sleep_until(self.deadline)


def effective_timeout(handler: object, default: float | None = None) -> float:
    """Resolve the time budget for *handler*.

    A non-zero ``handler.timeout`` wins, then *default*, then the
    hardcoded ``DEFAULT_TIMEOUT``. The result is always positive.
    """
    override = getattr(handler, "timeout", 0) or 0
    if override > 0:
        return override
    if default:
        return default
    return DEFAULT_TIMEOUT
