"""MessageEvent: one unit of a Server-Sent Events stream.

Frozen dataclass. The event-stream transport calls ``encode()`` and
writes the result as one flushed chunk.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """A single Server-Sent Event.

    ``event`` names the event type; ``""`` sends an unnamed message.
    Each entry of ``lines`` goes out as its own ``data:`` line and must not
    contain a line feed. That is the producer's responsibility; nothing
    here checks it.

    Clients join the data lines with ``\\n`` and drop the trailing
    newline, so ``MessageEvent(("a", "b"))`` arrives as ``"a\\nb"``.
    """

    lines: tuple[str, ...] = ()
    event: str = ""

    @classmethod
    def of(cls, *lines: str, event: str = "") -> MessageEvent:
        """Shorthand: ``MessageEvent.of("b", "c", event="note")``."""
        return cls(lines=lines, event=event)

    def encode(self) -> str:
        """Serialize to wire format, including the terminating blank line."""
        out: list[str] = []
        if self.event:
            out.append(f"event: {self.event}\n")
        out.extend(f"data: {line}\n" for line in self.lines)
        out.append("\n")
        return "".join(out)
