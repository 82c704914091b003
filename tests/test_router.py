"""Tests for warren.routing.router — mountable routers and dispatch order."""

import pytest

from warren.errors import ConfigurationError, NotFound
from warren.http.request import Request
from warren.http.response import Response
from warren.routing import Router, is_mountable
from warren.routing.router import to_response
from warren.testing import TestClient


def _request(method: str = "GET", path: str = "/") -> Request:
    return Request(method=method, path=path)


class TestIsMountable:
    def test_router_is_mountable(self) -> None:
        assert is_mountable(Router()) is True

    def test_router_class_is_not(self) -> None:
        assert is_mountable(Router) is False

    def test_function_is_not(self) -> None:
        assert is_mountable(lambda request: "x") is False

    def test_duck_typed_dispatch(self) -> None:
        class App:
            async def dispatch(self, request, path=None):
                return Response("duck")

        assert is_mountable(App()) is True


class TestToResponse:
    def test_passthrough(self) -> None:
        response = Response("x", status=201)
        assert to_response(response) is response

    def test_str(self) -> None:
        assert to_response("hello").text == "hello"

    def test_bytes(self) -> None:
        assert to_response(b"hello").body == b"hello"

    def test_other_raises(self) -> None:
        with pytest.raises(TypeError, match="int"):
            to_response(42)


class TestRegistration:
    async def test_get(self) -> None:
        router = Router()
        router.get("/", lambda request: "home")
        response = await router.dispatch(_request())
        assert response is not None
        assert response.text == "home"

    async def test_on_multiple_methods(self) -> None:
        router = Router()
        router.on(["get", "post"], "/form", lambda request: request.method)
        assert (await router.dispatch(_request("POST", "/form"))).text == "POST"
        assert (await router.dispatch(_request("GET", "/form"))).text == "GET"

    async def test_all_matches_any_method(self) -> None:
        router = Router()
        router.all("/any", lambda request: "any")
        assert (await router.dispatch(_request("PATCH", "/any"))).text == "any"

    async def test_route_decorator(self) -> None:
        router = Router()

        @router.route("/items/{id:int}", methods=["GET"])
        async def item(request: Request) -> str:
            return f"item {request.path_params['id'] + 1}"

        assert (await router.dispatch(_request("GET", "/items/41"))).text == "item 42"

    def test_mount_rejects_non_mountable(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().mount("/x", lambda request: "x")

    def test_mount_rejects_catch_all_prefix(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().mount("/{rest:path}", Router())

    def test_frozen_router_rejects_changes(self) -> None:
        router = Router()
        router.freeze()
        assert router.frozen is True
        with pytest.raises(RuntimeError):
            router.get("/late", lambda request: "late")


class TestDispatch:
    async def test_unmatched_returns_none(self) -> None:
        assert await Router().dispatch(_request("GET", "/missing")) is None

    async def test_mount_strips_prefix(self) -> None:
        sub = Router()
        sub.get("/items", lambda request: request.path)
        router = Router()
        router.mount("/api", sub)
        response = await router.dispatch(_request("GET", "/api/items"))
        assert response is not None
        assert response.text == "/api/items"

    async def test_mount_prefix_params(self) -> None:
        sub = Router()
        sub.get("/", lambda request: f"user {request.path_params['id']}")
        router = Router()
        router.mount("/users/{id}", sub)
        assert (await router.dispatch(_request("GET", "/users/7"))).text == "user 7"

    async def test_longest_prefix_first(self) -> None:
        shallow = Router()
        shallow.not_found(lambda request: Response("shallow", status=404))
        deep = Router()
        deep.not_found(lambda request: Response("deep", status=404))
        router = Router()
        router.mount("/a", shallow)
        router.mount("/a/b", deep)
        router.freeze()
        assert (await router.dispatch(_request("GET", "/a/b/x"))).text == "deep"
        assert (await router.dispatch(_request("GET", "/a/x"))).text == "shallow"

    async def test_static_prefix_before_param_prefix(self) -> None:
        param = Router()
        param.get("/", lambda request: f"param {request.path_params['slug']}")
        static = Router()
        static.get("/", lambda request: "static")
        router = Router()
        router.mount("/{slug}", param)
        router.mount("/blog", static)
        router.freeze()
        assert (await router.dispatch(_request("GET", "/blog"))).text == "static"
        assert (await router.dispatch(_request("GET", "/news"))).text == "param news"

    async def test_not_found_handler_after_mounts(self) -> None:
        sub = Router()
        sub.get("/", lambda request: "sub")
        router = Router()
        router.mount("/sub", sub)
        router.not_found(lambda request: Response("nope", status=404))
        assert (await router.dispatch(_request("GET", "/sub"))).text == "sub"
        response = await router.dispatch(_request("GET", "/other"))
        assert response.status == 404
        assert response.text == "nope"

    async def test_error_interceptor(self) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("boom")

        router = Router()
        router.get("/", boom)
        router.on_error(lambda request, exc: Response(f"caught {exc}", status=500))
        response = await router.dispatch(_request())
        assert response.status == 500
        assert response.text == "caught boom"

    async def test_error_propagates_without_interceptor(self) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("boom")

        router = Router()
        router.get("/", boom)
        with pytest.raises(RuntimeError):
            await router.dispatch(_request())

    async def test_sub_router_error_reaches_parent(self) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("boom")

        sub = Router()
        sub.get("/", boom)
        router = Router()
        router.mount("/sub", sub)
        router.on_error(lambda request: Response("parent", status=500))
        assert (await router.dispatch(_request("GET", "/sub"))).text == "parent"


class TestHandle:
    async def test_default_not_found(self) -> None:
        response = await Router().handle(_request("GET", "/missing"))
        assert response.status == 404

    async def test_other_method_falls_through_to_not_found(self) -> None:
        router = Router()
        router.get("/a", lambda request: "a")
        response = await router.handle(_request("POST", "/a"))
        assert response.status == 404

    async def test_http_error_keeps_status_and_headers(self) -> None:
        def gone(request: Request) -> str:
            raise NotFound("no such thing")

        router = Router()
        router.get("/", gone)
        response = await router.handle(_request())
        assert response.status == 404
        assert "no such thing" in response.text

    async def test_internal_error_is_500(self) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("secret")

        router = Router()
        router.get("/", boom)
        response = await router.handle(_request())
        assert response.status == 500
        assert "secret" not in response.text

    async def test_debug_shows_escaped_traceback(self) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("<oops>")

        router = Router(debug=True)
        router.get("/", boom)
        response = await router.handle(_request())
        assert response.status == 500
        assert "&lt;oops&gt;" in response.text
        assert "<oops>" not in response.text

    async def test_bad_return_type_is_500(self) -> None:
        router = Router()
        router.get("/", lambda request: 42)
        response = await router.handle(_request())
        assert response.status == 500


class TestIntrospection:
    def test_routes_have_full_paths(self) -> None:
        sub = Router()
        sub.get("/items", lambda request: "items")
        router = Router()
        router.get("/", lambda request: "home")
        router.mount("/api", sub)
        assert sorted(r.path for r in router.routes) == ["/", "/api/items"]

    def test_allowed_methods_across_mounts(self) -> None:
        sub = Router()
        sub.post("/items", lambda request: "created")
        router = Router()
        router.get("/api/items", lambda request: "list")
        router.mount("/api", sub)
        assert router.allowed_methods("/api/items") == frozenset({"GET", "POST"})

    def test_freeze_cascades(self) -> None:
        sub = Router()
        router = Router()
        router.mount("/sub", sub)
        router.freeze()
        assert sub.frozen is True


class TestASGI:
    async def test_request_through_client(self) -> None:
        router = Router()
        router.get("/hello", lambda request: f"hi {request.query.get('name')}")
        async with TestClient(router) as client:
            response = await client.get("/hello?name=ada")
        assert response.status == 200
        assert response.text == "hi ada"
        assert response.content_type == "text/html; charset=utf-8"

    async def test_head_has_no_body(self) -> None:
        router = Router()
        router.get("/", lambda request: "body")
        async with TestClient(router) as client:
            response = await client.head("/")
        assert response.status == 200
        assert response.body == b""

    async def test_lifespan(self) -> None:
        router = Router()
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict] = []

        async def receive() -> dict:
            return next(messages)

        async def send(message: dict) -> None:
            sent.append(message)

        await router({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert router.frozen is True
