"""Trie-based path matching for a single router level.

Routes are registered during setup and frozen before the first
request. Matching is O(path-depth): static segments first, then a
single parameter edge, then a catch-all.
"""

import re
from dataclasses import dataclass
from typing import Any

from warren.errors import ConfigurationError, MethodNotAllowed, NotFound
from warren.routing.params import CONVERTERS, convert_param
from warren.routing.route import ANY_METHOD, PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                "Path parameters are written as {param} or {param:type}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in route {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def split_path(path: str) -> list[str]:
    """Split a request path into its non-empty segments."""
    return [p for p in path.strip("/").split("/") if p]


def _route_for(routes: dict[str, Route], method: str) -> Route | None:
    """The route serving *method*, with HEAD answered by GET."""
    route = routes.get(method) or routes.get(ANY_METHOD)
    if route is None and method == "HEAD":
        route = routes.get("GET")
    return route


def _serves(routes: dict[str, Route], method: str | None) -> bool:
    if not routes:
        return False
    return method is None or _route_for(routes, method) is not None


class _TrieNode:
    """A node in the route trie. Mutable until the trie is frozen."""

    __slots__ = ("catch_all", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (path converter)
        self.catch_all: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes the remaining path."""

    param_name: str
    routes_by_method: dict[str, Route]


class RouteTrie:
    """Trie of routes for one router level.

    Usage::

        trie = RouteTrie()
        trie.add(Route("/users/{id:int}", handler, frozenset({"GET"})))
        trie.freeze()
        match = trie.match("GET", "/users/42")
    """

    __slots__ = ("_frozen", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._frozen = False

    def __len__(self) -> int:
        return len(self.routes)

    def add(self, route: Route) -> None:
        """Add a route. Must be called before freeze()."""
        if self._frozen:
            msg = "Cannot add routes after the router is frozen."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        routes_by_method={},
                    )
                for method in route.methods:
                    node.catch_all.routes_by_method[method] = route
                return

            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=CONVERTERS[seg.param_type].compile(),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        for method in route.methods:
            node.routes_by_method[method] = route

    def freeze(self) -> None:
        """Freeze the trie. No more routes can be added."""
        self._frozen = True

    @property
    def routes(self) -> list[Route]:
        """Every registered route, each listed once."""
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return result

    def _collect_routes(self, node: _TrieNode, seen: set[int], result: list[Route]) -> None:
        candidates = list(node.routes_by_method.values())
        if node.catch_all is not None:
            candidates.extend(node.catch_all.routes_by_method.values())
        for route in candidates:
            if id(route) not in seen:
                seen.add(id(route))
                result.append(route)

        for child in node.children.values():
            self._collect_routes(child, seen, result)
        if node.param_child is not None:
            self._collect_routes(node.param_child.node, seen, result)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = split_path(path)
        result = self._match_node(self._root, parts, 0, {}, method)
        if result is not None:
            routes, params = result
            return RouteMatch(route=_route_for(routes, method), path_params=params)

        # No branch serves the method; report what the first match allows.
        fallback = self._match_node(self._root, parts, 0, {})
        if fallback is None:
            raise NotFound(f"No route matches {method} {path!r}")
        raise MethodNotAllowed(frozenset(fallback[0]))

    def methods_for(self, path: str) -> frozenset[str]:
        """HTTP methods registered for *path* (empty if nothing matches)."""
        result = self._match_node(self._root, split_path(path), 0, {})
        if result is None:
            return frozenset()
        return frozenset(m for m in result[0] if m != ANY_METHOD)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, Any],
        method: str | None = None,
    ) -> tuple[dict[str, Route], dict[str, Any]] | None:
        """Recursively match path parts against the trie.

        With *method*, a node that cannot serve it does not match, so
        the search backtracks to parameter and catch-all edges.
        """
        if index == len(parts):
            if _serves(node.routes_by_method, method):
                return node.routes_by_method, params
            return None

        part = parts[index]

        # 1. Static child (exact match)
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, params, method)
            if result is not None:
                return result

        # 2. Parameter child
        edge = node.param_child
        if edge is not None and edge.regex.match(part):
            value = convert_param(part, edge.param_type)
            result = self._match_node(
                edge.node, parts, index + 1, {**params, edge.param_name: value}, method
            )
            if result is not None:
                return result

        # 3. Catch-all
        if node.catch_all is not None and _serves(node.catch_all.routes_by_method, method):
            remaining = "/".join(parts[index:])
            return node.catch_all.routes_by_method, {
                **params,
                node.catch_all.param_name: remaining,
            }

        return None
