"""JSON API: the same endpoint written two ways.

``/v1/whole`` uses ``json_handler`` for both directions. ``/v1/semi``
assembles a ``ClosureHandler`` by hand with its own parser, to show what
``json_handler`` does for you.

Run:
    cd examples/json_api && python app.py
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime

from wren import (
    JSON_CONTENT_TYPE,
    ClosureHandler,
    Dispatcher,
    RequestContext,
    exact,
    format_json,
    json_handler,
)
from wren.server import run


@dataclass(frozen=True, slots=True)
class Greeting:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Reply:
    message: str
    timestamp: datetime


def whole(_ctx: RequestContext, req: Greeting) -> Reply:
    return Reply(message=f"[whole]{req!r}", timestamp=datetime.now(UTC))


def parse_greeting(data: bytes, _path: str) -> Greeting:
    payload = json.loads(data)
    return Greeting(id=payload["id"], name=payload["name"])


def semi(_ctx: RequestContext, req: Greeting) -> Reply:
    return Reply(message=f"[semi]{req!r}", timestamp=datetime.now(UTC))


app = Dispatcher(
    json_handler(exact("POST", "/v1/whole"), Greeting, whole),
    ClosureHandler(
        exact("POST", "/v1/semi"), parse_greeting, semi, format_json, JSON_CONTENT_TYPE
    ),
)

if __name__ == "__main__":
    run(app)
