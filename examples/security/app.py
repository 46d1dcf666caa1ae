"""Security: bearer token checks with coded errors.

The dispatcher copies the ``Token`` header into ``ctx.token``. No token
is a 401, a wrong one a 403.

Run:
    cd examples/security && python app.py
"""

from wren import (
    ClosureHandler,
    CodedError,
    Dispatcher,
    RequestContext,
    coded_error,
    exact,
    format_empty,
    parse_empty,
)
from wren.server import run


def valid(token: str) -> bool:
    return token == "top_secret"


def vital(ctx: RequestContext, _req: None) -> None:
    if not ctx.token:
        raise CodedError(401, "need token")
    if not valid(ctx.token):
        raise coded_error(403, "invalid token %s", ctx.token)


app = Dispatcher(
    ClosureHandler(exact("POST", "/v1/vital"), parse_empty, vital, format_empty, "text/plain")
)

if __name__ == "__main__":
    run(app)
