"""SSE: a ticking event stream.

``POST /events`` sends the current time once per tick, up to
``ITEM_COUNT`` events. The dispatcher default is one second; the stream
handler overrides it, so changing ``TIMEOUT`` or ``ITEM_COUNT`` decides
whether the producer runs out first or the deadline does.

Run:
    cd examples/sse && python app.py
    curl -N -X POST localhost:8080/events
"""

import logging
from datetime import datetime

import anyio

from wren import (
    AppConfig,
    Dispatcher,
    EventStreamHandler,
    MessageEvent,
    RequestContext,
    exact,
    parse_empty,
)
from wren.server import run

logger = logging.getLogger("wren.examples.sse")

TICK = 1.0
TIMEOUT = 10.0
ITEM_COUNT = 6


async def ticks(ctx: RequestContext, _req: None):
    logger.info("start")
    for _ in range(ITEM_COUNT):
        with anyio.move_on_after(ctx.remaining()) as scope:
            await anyio.sleep(TICK)
        if scope.cancelled_caught:
            logger.info("stop ticker: %s", ctx.cause)
            return
        logger.info("tick")
        yield MessageEvent.of(datetime.now().isoformat())


app = Dispatcher(
    EventStreamHandler(exact("POST", "/events"), parse_empty, ticks, timeout=TIMEOUT),
    config=AppConfig(default_timeout=1.0),
)

if __name__ == "__main__":
    run(app)
