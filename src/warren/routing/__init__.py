"""Routing — trie path matching and mountable routers.

Routes are registered during setup and frozen, together with every
mounted sub-router, before the first request is served.
"""

from warren.routing.paths import directory_to_prefix, file_path_to_path
from warren.routing.route import Route, RouteMatch
from warren.routing.router import HTTP_METHODS, Mountable, Router, is_mountable

__all__ = [
    "HTTP_METHODS",
    "Mountable",
    "Route",
    "RouteMatch",
    "Router",
    "directory_to_prefix",
    "file_path_to_path",
    "is_mountable",
]
