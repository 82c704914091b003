"""Tests for warren.http — requests, headers, query params, responses."""

import pytest

from warren.http import Headers, QueryParams, Request, Response, html_response


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"content-type", b"text/plain"),))
        assert headers["Content-Type"] == "text/plain"
        assert "CONTENT-TYPE" in headers

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"X-One": "1"})
        assert headers.get("x-one") == "1"
        assert headers.get("missing") is None

    def test_get_list(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers.get_list("accept") == ["a", "b"]
        assert len(headers) == 1


class TestQueryParams:
    def test_first_value(self) -> None:
        query = QueryParams(b"a=1&a=2&b=")
        assert query["a"] == "1"
        assert query.get_list("a") == ["1", "2"]
        assert query.get("b") == ""

    def test_get_int(self) -> None:
        query = QueryParams(b"page=3&bad=x")
        assert query.get_int("page") == 3
        assert query.get_int("bad", 1) == 1
        assert query.get_int("missing") is None


class TestRequest:
    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "get",
            "path": "/search",
            "query_string": b"q=x",
            "headers": [(b"content-type", b"application/json")],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 1234),
        }

        async def receive() -> dict:
            return {"type": "http.request", "body": b"", "more_body": False}

        request = Request.from_asgi(scope, receive)
        assert request.method == "GET"
        assert request.url == "/search?q=x"
        assert request.content_type == "application/json"
        assert request.client == ("127.0.0.1", 1234)

    def test_with_path_params_merges(self) -> None:
        request = Request(method="GET", path="/", path_params={"a": "1"})
        derived = request.with_path_params({"b": "2"})
        assert derived.path_params == {"a": "1", "b": "2"}
        assert request.path_params == {"a": "1"}

    def test_with_no_params_returns_same(self) -> None:
        request = Request(method="GET", path="/")
        assert request.with_path_params({}) is request

    async def test_body_cached_across_derived_requests(self) -> None:
        calls = 0

        async def receive() -> dict:
            nonlocal calls
            calls += 1
            return {"type": "http.request", "body": b'{"n": 1}', "more_body": False}

        request = Request(method="POST", path="/", _receive=receive)
        assert await request.json() == {"n": 1}
        assert await request.with_path_params({"x": "y"}).text() == '{"n": 1}'
        assert calls == 1


class TestResponse:
    def test_chain(self) -> None:
        response = Response("x").with_status(201).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert response.status == 201
        assert response.header("x-a") == "1"
        assert response.header("X-B") == "2"
        assert response.header("missing", "d") == "d"

    def test_content_type_header_lookup(self) -> None:
        assert Response("x").with_content_type("text/plain").header("Content-Type") == "text/plain"

    def test_body_conversions(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"abc").text == "abc"

    def test_html_response(self) -> None:
        response = html_response("<p>x</p>", 404)
        assert response.status == 404
        assert response.content_type == "text/html; charset=utf-8"


class TestImmutability:
    def test_headers_reject_assignment(self) -> None:
        headers = Headers.from_dict({"a": "1"})
        with pytest.raises(AttributeError):
            headers.extra = "x"  # type: ignore[attr-defined]

    def test_query_keeps_raw(self) -> None:
        assert QueryParams(b"a=1").raw == b"a=1"
