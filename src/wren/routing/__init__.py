"""Routing: request predicates and their companion path parsers.

There is no routing table. The dispatcher asks each handler's matcher in
registration order, and the first one that says yes wins.
"""

from wren.routing.matchers import (
    MatchFunc,
    exact,
    has_query,
    match_all,
    path_id_parser,
    resource_with_id,
    resource_with_ids,
)

__all__ = [
    "MatchFunc",
    "exact",
    "has_query",
    "match_all",
    "path_id_parser",
    "resource_with_id",
    "resource_with_ids",
]
