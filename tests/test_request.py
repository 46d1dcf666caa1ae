"""Tests for wren.http: Request, Headers, QueryParams."""

import pytest

from wren.http.headers import Headers
from wren.http.query import QueryParams
from wren.http.request import ClientDisconnect, Request


def _receiver(*messages: dict):
    queue = list(messages)

    async def receive() -> dict:
        return queue.pop(0)

    return receive


def _scope(**overrides: object) -> dict:
    scope: dict = {
        "type": "http",
        "method": "POST",
        "path": "/v1/items",
        "query_string": b"a=1&b=2&a=3",
        "headers": [(b"content-type", b"text/plain"), (b"token", b"s3cret")],
        "client": ("127.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Token", b"abc"),))
        assert headers["token"] == "abc"
        assert headers["TOKEN"] == "abc"
        assert "tOkEn" in headers

    def test_get_default(self) -> None:
        assert Headers().get("origin") is None
        assert Headers().get("origin", "") == ""

    def test_multiple_values(self) -> None:
        headers = Headers(((b"x-a", b"1"), (b"X-A", b"2")))
        assert headers["x-a"] == "1"
        assert headers.get_list("x-a") == ["1", "2"]
        assert len(headers) == 1

    def test_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            Headers()["nope"]


class TestQueryParams:
    def test_first_value(self) -> None:
        query = QueryParams(b"a=1&a=2")
        assert query["a"] == "1"
        assert query.get_list("a") == ["1", "2"]

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=").get("flag") == ""

    def test_missing(self) -> None:
        assert QueryParams().get("x") is None
        assert QueryParams().get("x", "d") == "d"


class TestRequest:
    def test_from_asgi(self) -> None:
        request = Request.from_asgi(_scope(), _receiver())
        assert request.method == "POST"
        assert request.path == "/v1/items"
        assert request.headers["token"] == "s3cret"
        assert request.query.get_list("a") == ["1", "3"]
        assert request.client == ("127.0.0.1", 5000)

    def test_url_includes_query(self) -> None:
        request = Request.from_asgi(_scope(), _receiver())
        assert request.url == "/v1/items?a=1&b=2&a=3"
        assert Request.from_asgi(_scope(query_string=b""), _receiver()).url == "/v1/items"

    async def test_body_joins_chunks_and_caches(self) -> None:
        receive = _receiver(
            {"type": "http.request", "body": b"hel", "more_body": True},
            {"type": "http.request", "body": b"lo", "more_body": False},
        )
        request = Request.from_asgi(_scope(), receive)
        assert await request.body() == b"hello"
        assert await request.body() == b"hello"
        assert await request.text() == "hello"

    async def test_disconnect_mid_body(self) -> None:
        receive = _receiver(
            {"type": "http.request", "body": b"hel", "more_body": True},
            {"type": "http.disconnect"},
        )
        request = Request.from_asgi(_scope(), receive)
        with pytest.raises(ClientDisconnect):
            await request.body()

    async def test_built_request_has_empty_body(self) -> None:
        request = Request.build("get", "/x?y=1", headers={"Origin": "https://a.com"})
        assert request.method == "GET"
        assert request.query["y"] == "1"
        assert request.headers["origin"] == "https://a.com"
        assert await request.body() == b""
