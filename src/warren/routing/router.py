"""Composable router with sub-router mounting.

A ``Router`` owns one trie of routes, any number of mounted sub-routers
(or other mountable apps), an optional not-found handler, and an
optional error interceptor. Routers nest: the page installer builds one
sub-router per route directory and mounts each onto the outer router.

Dispatch order for a request at one level:

1. the router's own routes;
2. mounted apps whose prefix covers the path, longest prefix first;
3. the router's own not-found handler.

A level that finds nothing returns ``None`` so the parent can keep
looking. Exceptions raised below a level go to that level's error
interceptor, or propagate to the parent when it has none.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any, Protocol, runtime_checkable

from warren._internal.asgi import Receive, Scope, Send
from warren._internal.invoke import invoke
from warren._internal.types import ErrorHandler, Handler
from warren.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound
from warren.http.request import Request
from warren.http.response import Response
from warren.routing.params import CONVERTERS, convert_param
from warren.routing.route import ANY_METHOD, PathSegment, Route
from warren.routing.trie import RouteTrie, parse_path, split_path
from warren.server.errors import call_error_handler, handle_http_error, handle_internal_error
from warren.server.sender import send_response

logger = logging.getLogger("warren.routing")

HTTP_METHODS = frozenset(
    {"CONNECT", "DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT", "TRACE"}
)


@runtime_checkable
class Mountable(Protocol):
    """Anything that can be mounted under a router prefix.

    ``dispatch`` receives the request and the path relative to the mount
    point. It returns ``None`` when nothing under it matched.
    """

    async def dispatch(self, request: Request, path: str | None = None) -> Response | None: ...


def is_mountable(value: object) -> bool:
    """Whether *value* exposes a dispatch capability (is itself a router)."""
    return not isinstance(value, type) and isinstance(value, Mountable)


def to_response(result: Any) -> Response:
    """Coerce a router-level handler result into a Response."""
    match result:
        case Response():
            return result
        case str() | bytes():
            return Response(body=result)
        case _:
            msg = (
                f"Handler returned {type(result).__name__!r}; "
                "router handlers must return a Response, str, or bytes."
            )
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class _Mount:
    """A mounted app and its parsed prefix."""

    prefix: str
    segments: tuple[PathSegment, ...]
    patterns: tuple[re.Pattern[str] | None, ...]
    app: Mountable

    @classmethod
    def build(cls, prefix: str, app: Mountable) -> _Mount:
        segments = tuple(parse_path(prefix))
        patterns: list[re.Pattern[str] | None] = []
        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                msg = f"Mount prefix {prefix!r} cannot contain a catch-all parameter."
                raise ConfigurationError(msg)
            if seg.is_param:
                patterns.append(CONVERTERS[seg.param_type].compile())
            else:
                patterns.append(None)
        return cls(prefix=prefix, segments=segments, patterns=tuple(patterns), app=app)

    def match(self, path: str) -> tuple[str, dict[str, Any]] | None:
        """Strip this mount's prefix from *path*.

        Returns the remaining path and any captured prefix params, or
        ``None`` if the prefix does not cover *path*.
        """
        parts = split_path(path)
        if len(parts) < len(self.segments):
            return None

        params: dict[str, Any] = {}
        for seg, pattern, part in zip(self.segments, self.patterns, parts, strict=False):
            if pattern is None:
                if seg.value != part:
                    return None
            elif pattern.match(part):
                params[seg.param_name or ""] = convert_param(part, seg.param_type)
            else:
                return None

        rest = parts[len(self.segments) :]
        return "/" + "/".join(rest), params


class Router:
    """A mountable HTTP router.

    Mutable during setup (route registration, mounting, handlers).
    Frozen on first request, or explicitly with :meth:`freeze`.

    Usage::

        router = Router()
        router.get("/", lambda request: "home")

        api = Router()
        api.post("/items", create_item)
        api.not_found(lambda request: Response("no such item", status=404))
        router.mount("/api", api)

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the tree, even when
        several workers receive their first request concurrently.
    """

    __slots__ = (
        "_debug",
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_mounts",
        "_not_found_handler",
        "_trie",
    )

    def __init__(self, *, debug: bool = False) -> None:
        self._debug = debug
        self._trie = RouteTrie()
        self._mounts: list[_Mount] = []
        self._not_found_handler: Handler | None = None
        self._error_handler: ErrorHandler | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<Router routes={len(self._trie)} mounts={len(self._mounts)}>"

    # -- Registration --

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Cannot modify a router after it is frozen."
            raise RuntimeError(msg)

    def add(self, method: str | None, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for *method* (``None`` = any method)."""
        self._check_mutable()
        key = ANY_METHOD if method is None else method.upper()
        self._trie.add(Route(path=path, handler=handler, methods=frozenset({key})))

    def on(self, methods: str | Iterable[str], path: str, handler: Handler) -> None:
        """Register *handler* at *path* for one or more methods."""
        self._check_mutable()
        if isinstance(methods, str):
            methods = (methods,)
        self._trie.add(
            Route(path=path, handler=handler, methods=frozenset(m.upper() for m in methods))
        )

    def get(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for GET."""
        self.add("GET", path, handler)

    def post(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for POST."""
        self.add("POST", path, handler)

    def put(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for PUT."""
        self.add("PUT", path, handler)

    def patch(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for PATCH."""
        self.add("PATCH", path, handler)

    def delete(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for DELETE."""
        self.add("DELETE", path, handler)

    def head(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for HEAD."""
        self.add("HEAD", path, handler)

    def options(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for OPTIONS."""
        self.add("OPTIONS", path, handler)

    def all(self, path: str, handler: Handler) -> None:
        """Register *handler* at *path* for every method."""
        self.add(None, path, handler)

    def route(
        self, path: str, *, methods: Iterable[str] | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`on` (defaults to GET)::

            @router.route("/users/{id:int}", methods=["GET", "POST"])
            async def user(request):
                ...
        """

        def decorator(handler: Handler) -> Handler:
            self.on(tuple(methods or ("GET",)), path, handler)
            return handler

        return decorator

    def mount(self, prefix: str, app: Mountable) -> None:
        """Mount *app* so it handles every path under *prefix*."""
        self._check_mutable()
        if not is_mountable(app):
            msg = f"Cannot mount {app!r}: it has no dispatch() method."
            raise ConfigurationError(msg)
        self._mounts.append(_Mount.build(prefix, app))

    def not_found(self, handler: Handler) -> None:
        """Handle requests under this router that no route matched."""
        self._check_mutable()
        if self._not_found_handler is not None:
            logger.debug("Replacing not-found handler on %r", self)
        self._not_found_handler = handler

    def on_error(self, handler: ErrorHandler) -> None:
        """Intercept exceptions raised by this router's routes and mounts."""
        self._check_mutable()
        if self._error_handler is not None:
            logger.debug("Replacing error handler on %r", self)
        self._error_handler = handler

    # -- Freezing --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Freeze this router and every router mounted below it.

        Mounts are ordered longest prefix first. Among prefixes of equal
        length, a static segment outranks a parameter at the first place
        they differ, so /blog is tried before /{slug}. Idempotent.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._mounts.sort(key=_mount_rank, reverse=True)
            for mount in self._mounts:
                freeze = getattr(mount.app, "freeze", None)
                if callable(freeze):
                    freeze()
            self._trie.freeze()
            self._frozen = True

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """Every route reachable from this router, with full paths."""
        result = list(self._trie.routes)
        for mount in self._mounts:
            child_routes = getattr(mount.app, "routes", None)
            if not isinstance(child_routes, list):
                continue
            for route in child_routes:
                result.append(replace(route, path=_join(mount.prefix, route.path)))
        return result

    def allowed_methods(self, path: str) -> frozenset[str]:
        """Methods registered anywhere in the tree for *path*."""
        methods = set(self._trie.methods_for(path))
        for mount in self._mounts:
            found = mount.match(path)
            if found is None:
                continue
            probe = getattr(mount.app, "allowed_methods", None)
            if callable(probe):
                methods |= probe(found[0])
        return frozenset(methods)

    # -- Dispatch --

    async def dispatch(self, request: Request, path: str | None = None) -> Response | None:
        """Dispatch *request* at *path* (defaults to ``request.path``).

        Returns ``None`` when neither a route, a mount, nor this
        router's not-found handler claimed the request.
        """
        if path is None:
            path = request.path
        try:
            return await self._dispatch(request, path)
        except Exception as exc:
            if self._error_handler is None:
                raise
            if not isinstance(exc, HTTPError):
                logger.exception("Error in %s %s", request.method, request.path)
            result = await call_error_handler(self._error_handler, request, exc)
            return to_response(result)

    async def _dispatch(self, request: Request, path: str) -> Response | None:
        try:
            match = self._trie.match(request.method, path)
        except (NotFound, MethodNotAllowed):
            match = None

        if match is not None:
            result = await invoke(match.route.handler, request.with_path_params(match.path_params))
            return to_response(result)

        for mount in self._mounts:
            found = mount.match(path)
            if found is None:
                continue
            sub_path, params = found
            response = await mount.app.dispatch(request.with_path_params(params), sub_path)
            if response is not None:
                return response

        if self._not_found_handler is not None:
            return to_response(await invoke(self._not_found_handler, request))
        return None

    async def handle(self, request: Request) -> Response:
        """Dispatch *request*, falling back to default 404/500 pages.

        A path registered only for other methods falls through to
        not-found like any other unmatched request.
        """
        self.freeze()
        try:
            response = await self.dispatch(request)
            if response is None:
                raise NotFound(f"No route matches {request.method} {request.path!r}")
        except HTTPError as exc:
            return handle_http_error(exc, request, debug=self._debug)
        except Exception as exc:
            return handle_internal_error(exc, request, debug=self._debug)
        return response

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send, head_only=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze the tree at startup and acknowledge shutdown."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self.freeze()
                except Exception as exc:  # noqa: BLE001
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _join(prefix: str, path: str) -> str:
    joined = "/" + "/".join(p for p in (prefix.strip("/"), path.strip("/")) if p)
    return joined


def _mount_rank(mount: _Mount) -> tuple[int, tuple[bool, ...]]:
    return len(mount.segments), tuple(not seg.is_param for seg in mount.segments)
