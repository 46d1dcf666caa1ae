"""Handlers: the contract and its closure-based implementations."""

from wren.handlers.closure import (
    JSON_CONTENT_TYPE,
    ClosureHandler,
    ClosureRoute,
    Empty,
    RawRequest,
    format_empty,
    format_json,
    format_text,
    json_handler,
    json_parser,
    parse_empty,
    parse_raw,
)
from wren.handlers.contract import (
    CanHandle,
    CanMatch,
    CanParse,
    CanRespond,
    FormatFunc,
    HandleFunc,
    Handler,
    HasOptionalTimeout,
    ParseFunc,
)

__all__ = [
    "JSON_CONTENT_TYPE",
    "CanHandle",
    "CanMatch",
    "CanParse",
    "CanRespond",
    "ClosureHandler",
    "ClosureRoute",
    "Empty",
    "FormatFunc",
    "HandleFunc",
    "Handler",
    "HasOptionalTimeout",
    "ParseFunc",
    "RawRequest",
    "format_empty",
    "format_json",
    "format_text",
    "json_handler",
    "json_parser",
    "parse_empty",
    "parse_raw",
]
