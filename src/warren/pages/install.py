"""Route installer: turn route indices into a composed router.

Each route directory becomes its own sub-router, mounted on the outer
router at the directory's URL prefix. Route files register on the
sub-router according to their export shape; the directory's own
``_404`` / ``_error`` files become the sub-router's not-found handler
and error interceptor. The root directory's preserved files are the
process-wide defaults on the outer router.

Because directory sub-routers are mounted side by side on the outer
router, an error handler only sees faults from its own directory.
Unmatched paths fall to the deepest directory whose prefix covers them
and has a not-found handler, then to the root default.
"""

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from warren._internal.invoke import call_with
from warren._internal.types import RenderToString
from warren.config import RoutesConfig
from warren.errors import ConfigurationError, HTTPError
from warren.http.request import Request
from warren.http.response import Response
from warren.markup import Fragment
from warren.markup import create_element as default_create_element
from warren.markup import render_to_string as default_render_to_string
from warren.pages.classify import classify
from warren.pages.compose import Composer
from warren.pages.head import Head
from warren.pages.index import build_indexes, partition_modules
from warren.pages.layouts import layout_chain
from warren.pages.types import (
    ClassifiedRoute,
    LayoutFile,
    ModuleRegistry,
    MountScope,
    RouteFile,
    RouteIndexes,
    RouteKind,
)
from warren.routing import Router, directory_to_prefix, file_path_to_path

logger = logging.getLogger("warren.pages")


class RouteInstaller:
    """Install indexed route files onto a router.

    Args:
        indexes: Route, layout, and preserved indices.
        router: Outer router receiving one mount per directory.
        composer: Wraps handler output in layouts.
        create_head: Factory for a fresh per-request :class:`Head`.
        path_for: Maps a route file name to its URL path.
        not_found_name: Filename passed to layouts for not-found pages.
        error_name: Filename passed to layouts for error pages.
    """

    def __init__(
        self,
        indexes: RouteIndexes,
        *,
        router: Router,
        composer: Composer,
        create_head: Callable[[], Head] = Head,
        path_for: Callable[[str], str] = file_path_to_path,
        not_found_name: str = "_404",
        error_name: str = "_error",
    ) -> None:
        self.indexes = indexes
        self.router = router
        self.composer = composer
        self.create_head = create_head
        self.path_for = path_for
        self.not_found_name = not_found_name
        self.error_name = error_name
        self._installed = 0

    def install(self) -> Router:
        """Install every directory, then the root defaults. Returns the router."""
        root = self.indexes.root
        for directory in sorted(self.indexes.routes):
            self._install_directory(directory, self.indexes.routes[directory])

        preserved = self.indexes.preserved.get(root)
        if preserved is not None:
            self._install_preserved(self.router, preserved.not_found, preserved.error, layouts=None)

        logger.info(
            "Installed %d routes from %d directories under %s",
            self._installed,
            len(self.indexes.routes),
            root or "/",
        )
        return self.router

    # -- Per directory --

    def _install_directory(self, directory: str, files: Mapping[str, RouteFile]) -> None:
        root = self.indexes.root
        sub = Router()
        chain = layout_chain(directory, self.indexes.layouts, root)

        for filename in sorted(files):
            route_file = files[filename]
            classified = classify(route_file.export)
            if classified is None:
                logger.debug("Skipping %s: no usable default export", route_file.path)
                continue
            self._install_route(sub, route_file, classified, chain)

        preserved = self.indexes.preserved.get(directory)
        if directory != root and preserved is not None:
            self._install_preserved(sub, preserved.not_found, preserved.error, layouts=chain)

        prefix = directory_to_prefix(directory, root)
        self.router.mount(prefix, sub)
        logger.debug("Mounted %s at %s", directory or "/", prefix)

    def _install_route(
        self,
        sub: Router,
        route_file: RouteFile,
        classified: ClassifiedRoute,
        chain: Sequence[LayoutFile],
    ) -> None:
        path = self.path_for(route_file.filename)

        match classified.kind:
            case RouteKind.MOUNTED_APP:
                sub.mount(path, classified.export)
                self._installed += 1
            case RouteKind.COMPONENT:
                sub.get(path, self._page_handler(classified.export, chain, route_file.filename))
                self._installed += 1
            case RouteKind.METHOD_MAP:
                if classified.app_hook is not None:
                    self._run_app_hook(classified.app_hook, sub, path, chain, route_file)
                for method, handler in classified.methods:
                    sub.add(method, path, self._page_handler(handler, chain, route_file.filename))
                    self._installed += 1

    def _page_handler(
        self, component: Callable[..., Any], chain: Sequence[LayoutFile], filename: str
    ) -> Callable[[Request], Any]:
        composer = self.composer
        create_head = self.create_head

        async def handler(request: Request) -> Response:
            head = create_head()
            # A path parameter named like a built-in argument is shadowed by it.
            available = {**request.path_params, "request": request, "head": head}
            result = call_with(component, **available)
            return await composer.compose(result, 200, layouts=chain, head=head, filename=filename)

        handler.__name__ = getattr(component, "__name__", "handler")
        handler.__qualname__ = getattr(component, "__qualname__", handler.__name__)
        return handler

    def _run_app_hook(
        self,
        hook: Callable[..., Any],
        sub: Router,
        path: str,
        chain: Sequence[LayoutFile],
        route_file: RouteFile,
    ) -> None:
        composer = self.composer
        create_head = self.create_head
        filename = route_file.filename

        async def render(content: Any, status: int = 200, *, head: Head | None = None) -> Response:
            return await composer.compose(
                content, status, layouts=chain, head=head or create_head(), filename=filename
            )

        scope = MountScope(path=path, head=create_head(), new_head=create_head, render=render)
        result = hook(sub, scope)
        if inspect.isawaitable(result):
            close = getattr(result, "close", None)
            if callable(close):
                close()
            msg = f"APP hook in {route_file.path} must be synchronous; it runs at startup."
            raise ConfigurationError(msg)

    # -- Preserved files --

    def _install_preserved(
        self,
        target: Router,
        not_found: Callable[..., Any] | None,
        error: Callable[..., Any] | None,
        *,
        layouts: Sequence[LayoutFile] | None,
    ) -> None:
        composer = self.composer
        create_head = self.create_head

        if not_found is not None:
            not_found_name = self.not_found_name

            async def not_found_page(request: Request) -> Response:
                head = create_head()
                result = call_with(not_found, request=request, head=head)
                return await composer.compose(
                    result, 404, layouts=layouts, head=head, filename=not_found_name
                )

            target.not_found(not_found_page)

        if error is not None:
            error_name = self.error_name

            async def error_page(request: Request, exc: Exception) -> Response:
                head = create_head()
                status = exc.status if isinstance(exc, HTTPError) else 500
                result = call_with(error, request=request, error=exc, head=head)
                return await composer.compose(
                    result, status, layouts=layouts, head=head, filename=error_name
                )

            target.on_error(error_page)


def create_router(
    *,
    routes: Mapping[str, Any] | None = None,
    layouts: Mapping[str, Any] | None = None,
    preserved: Mapping[str, Any] | None = None,
    modules: Mapping[str, Any] | None = None,
    directory: str | None = None,
    root: str | None = None,
    router: Router | None = None,
    render_to_string: RenderToString | None = None,
    create_head: Callable[[], Head] | None = None,
    create_element: Callable[..., Any] | None = None,
    fragment: Any = None,
    path_for: Callable[[str], str] | None = None,
    config: RoutesConfig | None = None,
) -> Router:
    """Build a router from a route tree.

    Modules come from, in order of preference: the explicit ``routes``
    / ``layouts`` / ``preserved`` partitions, the flat ``modules``
    registry (partitioned by file name), or a ``directory`` on disk.

    Usage::

        router = create_router(directory="site/routes")

        router = create_router(
            routes={"/app/routes/index.py": index_module},
            layouts={"/app/routes/_layout.py": layout_module},
        )
    """
    config = config or RoutesConfig()
    root = (root if root is not None else config.root).rstrip("/")

    if modules is None and directory is not None:
        from warren.pages.discovery import discover_modules

        modules = discover_modules(directory, root=root, config=config)

    base = partition_modules(modules or {}, config)
    registry = ModuleRegistry(
        routes=routes if routes is not None else base.routes,
        layouts=layouts if layouts is not None else base.layouts,
        preserved=preserved if preserved is not None else base.preserved,
    )
    indexes = build_indexes(registry, root, config)

    if create_head is None:
        element = create_element or default_create_element
        frag = fragment if fragment is not None else Fragment

        def new_head() -> Head:
            return Head(create_element=element, fragment=frag)

        create_head = new_head

    composer = Composer(
        indexes.layouts,
        root,
        render_to_string or default_render_to_string,
        doctype=config.doctype,
    )
    installer = RouteInstaller(
        indexes,
        router=router if router is not None else Router(debug=config.debug),
        composer=composer,
        create_head=create_head,
        path_for=path_for or file_path_to_path,
        not_found_name=config.not_found_name,
        error_name=config.error_name,
    )
    return installer.install()
