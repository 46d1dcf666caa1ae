"""Tests for wren.routing.matchers: predicates and paired path parsers."""

import pytest

from wren.http.request import Request
from wren.routing.matchers import (
    exact,
    has_query,
    match_all,
    path_id_parser,
    resource_with_id,
    resource_with_ids,
)


def _req(method: str, url: str) -> Request:
    return Request.build(method, url)


class TestExact:
    def test_matches_method_and_path(self) -> None:
        assert exact("GET", "/echo")(_req("GET", "/echo"))

    def test_method_mismatch(self) -> None:
        assert not exact("GET", "/echo")(_req("POST", "/echo"))

    def test_path_is_literal(self) -> None:
        assert not exact("GET", "/echo")(_req("GET", "/echo/"))

    def test_query_is_ignored(self) -> None:
        assert exact("GET", "/echo")(_req("GET", "/echo?x=1"))


class TestHasQuery:
    def test_matches_value(self) -> None:
        assert has_query("mode", "full")(_req("GET", "/x?mode=full"))

    def test_other_value(self) -> None:
        assert not has_query("mode", "full")(_req("GET", "/x?mode=lite"))

    def test_first_value_counts(self) -> None:
        assert has_query("mode", "a")(_req("GET", "/x?mode=a&mode=b"))

    def test_missing_key_reads_as_empty(self) -> None:
        assert has_query("mode", "")(_req("GET", "/x"))
        assert not has_query("mode", "full")(_req("GET", "/x"))


class TestMatchAll:
    def test_all_must_match(self) -> None:
        matcher = match_all(exact("GET", "/x"), has_query("a", "1"))
        assert matcher(_req("GET", "/x?a=1"))
        assert not matcher(_req("GET", "/x?a=2"))
        assert not matcher(_req("POST", "/x?a=1"))

    def test_short_circuits_in_order(self) -> None:
        calls: list[str] = []

        def first(_: Request) -> bool:
            calls.append("first")
            return False

        def second(_: Request) -> bool:
            calls.append("second")
            return True

        assert not match_all(first, second)(_req("GET", "/"))
        assert calls == ["first"]

    def test_no_criteria_matches_everything(self) -> None:
        assert match_all()(_req("DELETE", "/anything"))


class TestResourceWithIDs:
    PARTS = ["users", "", "items", ""]

    @pytest.mark.parametrize(
        ("name", "method", "url", "ids"),
        [
            ("happy path", "GET", "/users/123/items/456", [123, 456]),
            ("no leading slash", "GET", "users/123/items/456", [123, 456]),
            ("trailing slash", "GET", "/users/123/items/456/", [123, 456]),
            ("signed id", "GET", "/users/-1/items/+2", [-1, 2]),
        ],
    )
    def test_matches_and_extracts(self, name: str, method: str, url: str, ids: list[int]) -> None:
        match, parse = resource_with_ids("GET", self.PARTS)
        request = _req(method, url)
        assert match(request), name
        assert parse(b"", request.path) == ids

    @pytest.mark.parametrize(
        ("name", "method", "url"),
        [
            ("method", "POST", "/users/123/items/456"),
            ("extra segment", "GET", "/users/123/items/456/desc"),
            ("missing segment", "GET", "/users/123/items"),
            ("not a number", "GET", "/users/abc/items/456"),
            ("bad literal", "GET", "/user/123/items/456"),
            ("empty placeholder", "GET", "/users//items/456"),
            ("spaces", "GET", "/users/ 1/items/456"),
            ("underscores", "GET", "/users/1_000/items/456"),
        ],
    )
    def test_rejects(self, name: str, method: str, url: str) -> None:
        match, _ = resource_with_ids("GET", self.PARTS)
        assert not match(_req(method, url)), name

    def test_parser_trusts_matcher(self) -> None:
        # Outside its precondition the parser does not raise; it reads
        # non-integer placeholders as zero.
        _, parse = resource_with_ids("GET", self.PARTS)
        assert parse(b"", "/users/abc/items/7") == [0, 7]

    def test_empty_parts_match_root_only(self) -> None:
        match, parse = resource_with_ids("GET", [])
        assert match(_req("GET", "/"))
        assert not match(_req("GET", "/users"))
        assert parse(b"", "/") == []

    def test_literal_only(self) -> None:
        match, parse = resource_with_ids("GET", ["health"])
        assert match(_req("GET", "/health"))
        assert parse(b"", "/health") == []


class TestResourceWithID:
    def test_prefix_only(self) -> None:
        match = resource_with_id("DELETE", "/v1/widgets/")
        assert match(_req("DELETE", "/v1/widgets/42"))
        assert not match(_req("GET", "/v1/widgets/42"))
        assert not match(_req("DELETE", "/v1/widgets/abc"))
        assert not match(_req("DELETE", "/v1/widgets/"))
        assert not match(_req("DELETE", "/v1/gadgets/42"))

    def test_prefix_and_suffix(self) -> None:
        match = resource_with_id("POST", "/v1/items/", "/content")
        assert match(_req("POST", "/v1/items/7/content"))
        assert not match(_req("POST", "/v1/items/7"))
        assert not match(_req("POST", "/v1/items/7/contents"))
        assert not match(_req("POST", "/v1/items/x/content"))

    @pytest.mark.parametrize(
        ("segment", "matches"),
        [
            ("9223372036854775807", True),
            ("-9223372036854775808", True),
            ("+7", True),
            ("9223372036854775808", False),
            ("-9223372036854775809", False),
            ("1" * 30, False),
        ],
    )
    def test_ids_are_64_bit(self, segment: str, matches: bool) -> None:
        match = resource_with_id("GET", "/v1/widgets/")
        assert match(_req("GET", f"/v1/widgets/{segment}")) is matches

    def test_multi_id_rejects_overflow(self) -> None:
        match, parse = resource_with_ids("GET", ["users", ""])
        assert not match(_req("GET", "/users/" + "9" * 20))
        assert parse(b"", "/users/" + "9" * 20) == [0]


class TestPathIDParser:
    def test_last_segment(self) -> None:
        assert path_id_parser()(b"", "/v1/widgets/42") == 42

    def test_with_suffix(self) -> None:
        assert path_id_parser("/content")(b"ignored", "/v1/items/7/content") == 7

    def test_missing_suffix_is_parse_error(self) -> None:
        with pytest.raises(ValueError, match="no suffix /content"):
            path_id_parser("/content")(b"", "/v1/items/7")

    def test_pairs_with_resource_with_id(self) -> None:
        match = resource_with_id("POST", "/v1/items/", "/content")
        parse = path_id_parser("/content")
        request = _req("POST", "/v1/items/99/content")
        assert match(request)
        assert parse(b"", request.path) == 99
