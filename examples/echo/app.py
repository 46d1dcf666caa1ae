"""Echo: the smallest possible wren app.

One closure handler: GET /echo writes back the request path and body.

Run:
    cd examples/echo && python app.py
"""

from wren import ClosureHandler, Dispatcher, RawRequest, exact, format_text, parse_raw
from wren.server import run


def describe(_ctx, req: RawRequest) -> str:
    return f"path={req.path}\ndata={req.data.decode()}"


app = Dispatcher(
    ClosureHandler(
        # Which requests this handler takes.
        exact("GET", "/echo"),
        # How the body and path become the request value.
        parse_raw,
        describe,
        # How the result becomes bytes.
        format_text,
        "text/plain",
    )
)

if __name__ == "__main__":
    run(app)
