"""Real-time push: Server-Sent Events."""

from wren.realtime.events import MessageEvent
from wren.realtime.sse import EventStreamHandler, stream_events

__all__ = ["EventStreamHandler", "MessageEvent", "stream_events"]
