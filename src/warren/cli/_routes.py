"""``warren routes``: the METHOD / PATH / HANDLER table."""

import argparse

from warren.cli._resolve import resolve_router
from warren.config import RoutesConfig
from warren.routing.route import ANY_METHOD

_HEADER = ("METHOD", "PATH", "HANDLER")


def run_routes(args: argparse.Namespace, config: RoutesConfig) -> None:
    router = resolve_router(args, config)
    router.freeze()

    if not router.routes:
        print("No routes registered.")
        return

    rows = [_HEADER]
    for route in sorted(router.routes, key=lambda r: r.path):
        methods = ", ".join(sorted("ANY" if m == ANY_METHOD else m for m in route.methods))
        handler = getattr(route.handler, "__qualname__", None) or repr(route.handler)
        rows.append((methods, route.path, handler))

    method_width = max(len(row[0]) for row in rows)
    path_width = max(len(row[1]) for row in rows)
    for i, (methods, path, handler) in enumerate(rows):
        print(f"{methods:<{method_width}}  {path:<{path_width}}  {handler}")
        if i == 0:
            print("-" * min(method_width + path_width + 4 + len(handler), 80))
