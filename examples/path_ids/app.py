"""Path IDs: integers pulled out of the URL.

``DELETE /v1/widgets/<id>`` uses the stock ID parser.
``POST /v1/items/<id>/content`` combines the ID with the body.

Run:
    cd examples/path_ids && python app.py
"""

from dataclasses import dataclass

from wren import (
    JSON_CONTENT_TYPE,
    ClosureHandler,
    Dispatcher,
    format_json,
    path_id_parser,
    resource_with_id,
)
from wren.server import run


@dataclass(frozen=True, slots=True)
class Content:
    id: int
    body: str


SUFFIX = "/content"
_content_id = path_id_parser(SUFFIX)


def parse_content(data: bytes, path: str) -> Content:
    return Content(id=_content_id(data, path), body=data.decode())


app = Dispatcher(
    ClosureHandler(
        resource_with_id("DELETE", "/v1/widgets/"),
        path_id_parser(),
        lambda _ctx, widget_id: Content(id=widget_id, body="NA"),
        format_json,
        JSON_CONTENT_TYPE,
    ),
    ClosureHandler(
        resource_with_id("POST", "/v1/items/", SUFFIX),
        parse_content,
        lambda _ctx, content: content,
        format_json,
        JSON_CONTENT_TYPE,
    ),
)

if __name__ == "__main__":
    run(app)
