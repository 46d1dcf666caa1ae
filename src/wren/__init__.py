"""Wren: a small ASGI dispatch layer.

Routes each request to the first handler that claims it, parses a typed
request value, runs the business logic under a deadline, and writes the
response, a coded error, or a Server-Sent Events stream.

Basic usage::

    from wren import ClosureHandler, Dispatcher, exact, format_text, parse_raw

    echo = ClosureHandler(
        exact("GET", "/echo"),
        parse_raw,
        lambda ctx, req: req.data.decode(),
        format_text,
        "text/plain",
    )
    app = Dispatcher(echo)  # any ASGI server, or wren.server.run(app)
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "JSON_CONTENT_TYPE",
    "AppConfig",
    "ClosureHandler",
    "CodedError",
    "ConfigurationError",
    "DeadlineExceeded",
    "Dispatcher",
    "Empty",
    "EventStreamHandler",
    "Handler",
    "MessageEvent",
    "RawRequest",
    "Request",
    "RequestContext",
    "ResponseSink",
    "WrenError",
    "coded_error",
    "effective_timeout",
    "exact",
    "format_empty",
    "format_json",
    "format_text",
    "has_query",
    "is_client_fault",
    "json_handler",
    "json_parser",
    "match_all",
    "parse_empty",
    "parse_raw",
    "path_id_parser",
    "resource_with_id",
    "resource_with_ids",
]

_LOCATIONS = {
    "AppConfig": "wren.config",
    "RequestContext": "wren.context",
    "effective_timeout": "wren.context",
    "Dispatcher": "wren.server.dispatcher",
    "Request": "wren.http.request",
    "ResponseSink": "wren.http.sink",
    "Handler": "wren.handlers.contract",
    "MessageEvent": "wren.realtime.events",
    "EventStreamHandler": "wren.realtime.sse",
}
for _name in ("CodedError", "ConfigurationError", "DeadlineExceeded", "WrenError"):
    _LOCATIONS[_name] = "wren.errors"
for _name in ("coded_error", "is_client_fault"):
    _LOCATIONS[_name] = "wren.errors"
for _name in (
    "exact",
    "has_query",
    "match_all",
    "path_id_parser",
    "resource_with_id",
    "resource_with_ids",
):
    _LOCATIONS[_name] = "wren.routing.matchers"
for _name in (
    "JSON_CONTENT_TYPE",
    "ClosureHandler",
    "Empty",
    "RawRequest",
    "format_empty",
    "format_json",
    "format_text",
    "json_handler",
    "json_parser",
    "parse_empty",
    "parse_raw",
):
    _LOCATIONS[_name] = "wren.handlers.closure"
del _name


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import wren`` fast while providing a flat top-level namespace.
    """
    module_name = _LOCATIONS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
