"""Request predicates.

A matcher is a plain callable ``(Request) -> bool``. Matchers must be
cheap and side-effect free: the dispatcher calls them for every handler
on every request until one succeeds.

Resource matchers come with a paired parser that pulls the integer IDs
back out of the path. The parser trusts its matcher: it is only correct
for paths the matcher accepted, and does not validate again. On a path
the matcher would reject, placeholders that are not integers come back
as ``0`` rather than raising.

IDs are signed 64-bit integers: an optional sign and ASCII digits, and
a value outside that range is not an ID at all.
"""

import re
from collections.abc import Callable, Sequence
from typing import TypeAlias

from wren.handlers.contract import ParseFunc
from wren.http.request import Request

MatchFunc: TypeAlias = Callable[[Request], bool]

# A base-10 integer with an optional sign; no spaces, no underscores.
_INTEGER = re.compile(r"[+-]?[0-9]+")

# IDs are signed 64-bit; anything wider is not an ID.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _is_integer(text: str) -> bool:
    return _INTEGER.fullmatch(text) is not None and _MIN_ID <= int(text) <= _MAX_ID


def _to_int(text: str) -> int:
    return int(text) if _is_integer(text) else 0


def _segments(path: str) -> list[str]:
    # Whether the path carries leading/trailing slashes depends on the
    # raw URL, so trim before splitting. The root path has no segments.
    trimmed = path.strip("/")
    return trimmed.split("/") if trimmed else []


def match_all(*criteria: MatchFunc) -> MatchFunc:
    """Match when every criterion matches, checked in order."""

    def matcher(request: Request) -> bool:
        return all(criterion(request) for criterion in criteria)

    return matcher


def exact(method: str, path: str) -> MatchFunc:
    """Match one method on one literal path."""

    def matcher(request: Request) -> bool:
        return request.path == path and request.method == method

    return matcher


def has_query(key: str, value: str) -> MatchFunc:
    """Match when the first query value for *key* equals *value*.

    A missing key reads as ``""``, so ``has_query("q", "")`` also matches
    requests without ``q``.
    """

    def matcher(request: Request) -> bool:
        return request.query.get(key, "") == value

    return matcher


def resource_with_id(method: str, prefix: str, suffix: str = "") -> MatchFunc:
    """Match ``<prefix><int><suffix>``, e.g. ``/v1/items/42/content``.

    *prefix* should end with a slash and *suffix*, if any, start with one.
    Pair with ``path_id_parser(suffix)`` to read the ID back.
    """

    def matcher(request: Request) -> bool:
        if request.method != method:
            return False
        rest = request.path
        if not rest.startswith(prefix):
            return False
        rest = rest[len(prefix) :]
        if suffix:
            if not rest.endswith(suffix):
                return False
            rest = rest[: -len(suffix)]
        return _is_integer(rest)

    return matcher


def resource_with_ids(method: str, parts: Sequence[str]) -> tuple[MatchFunc, ParseFunc]:
    """Build a matcher and parser for a multi-ID resource path.

    Each entry of *parts* describes one path segment: ``""`` is an
    integer placeholder, anything else must match literally::

        match, parse = resource_with_ids("GET", ["users", "", "items", ""])
        match(request)                          # GET /users/123/items/456
        parse(b"", "/users/123/items/456")      # [123, 456]

    The parser returns the integers at placeholder positions, in order.
    Call it only for paths the matcher accepted.
    """
    specs = tuple(parts)
    placeholders = tuple(i for i, part in enumerate(specs) if part == "")

    def matcher(request: Request) -> bool:
        if request.method != method:
            return False
        segments = _segments(request.path)
        if len(segments) != len(specs):
            return False
        for part, segment in zip(specs, segments, strict=True):
            if part:
                if part != segment:
                    return False
            elif not _is_integer(segment):
                return False
        return True

    def parser(_data: bytes, path: str) -> list[int]:
        segments = _segments(path)
        return [_to_int(segments[i]) for i in placeholders if i < len(segments)]

    return matcher, parser


def path_id_parser(suffix: str = "") -> ParseFunc:
    """Parser for paths accepted by ``resource_with_id``.

    Returns the integer in the last path segment once *suffix* is removed.
    A path without the suffix is a parse error.
    """

    def parser(_data: bytes, path: str) -> int:
        if suffix:
            if not path.endswith(suffix):
                msg = f"no suffix {suffix} in path {path}"
                raise ValueError(msg)
            path = path[: -len(suffix)]
        return _to_int(path.rsplit("/", 1)[-1])

    return parser
