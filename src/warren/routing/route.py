"""Value types shared by the trie and the router."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ANY_METHOD = "*"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-separated piece of a route pattern.

    ``users`` is literal. ``{id}`` and ``{id:int}`` are parameters, the
    latter restricted by the ``int`` converter.
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    route: Route
    # Already converted, so ``{id:int}`` yields an int.
    path_params: dict[str, Any]
