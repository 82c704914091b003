"""Directory indices over the module registry.

Pure functions: no filesystem access. The registry maps normalized
paths (``/app/routes/blog/[slug].py``) to loaded modules; the indexer
groups them by containing directory so the installer can look up a
directory's routes, layout, and preserved handlers in one step.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from warren.config import RoutesConfig
from warren.errors import ConfigurationError
from warren.pages.classify import default_export
from warren.pages.types import (
    LayoutFile,
    ModuleRegistry,
    PreservedFiles,
    RouteFile,
    RouteIndexes,
)

logger = logging.getLogger("warren.pages")


def split_file_path(path: str) -> tuple[str, str]:
    """Split a registry path into ``(directory, filename)``."""
    directory, _, filename = path.rpartition("/")
    return directory, filename


def _stem_and_suffix(filename: str) -> tuple[str, str]:
    stem, dot, suffix = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, "." + suffix


def partition_modules(
    modules: Mapping[str, Any], config: RoutesConfig | None = None
) -> ModuleRegistry:
    """Split a flat ``path -> module`` mapping by naming convention.

    ``_layout.*`` files are layouts, ``_404.*`` / ``_error.*`` files are
    preserved handlers, and any other file whose name does not start
    with ``_`` or ``.`` is a route. Files with unknown suffixes are
    ignored.
    """
    config = config or RoutesConfig()
    preserved_stems = {config.not_found_name, config.error_name}
    routes: dict[str, Any] = {}
    layouts: dict[str, Any] = {}
    preserved: dict[str, Any] = {}

    for path, module in modules.items():
        _, filename = split_file_path(path)
        stem, suffix = _stem_and_suffix(filename)
        if stem == config.layout_name and suffix in config.layout_suffixes:
            layouts[path] = module
        elif stem in preserved_stems and suffix in config.preserved_suffixes:
            preserved[path] = module
        elif filename.startswith(("_", ".")):
            continue
        elif suffix in config.route_suffixes:
            routes[path] = module

    return ModuleRegistry(routes=routes, layouts=layouts, preserved=preserved)


def group_by_directory(files: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Group ``path -> value`` into ``directory -> filename -> value``."""
    grouped: dict[str, dict[str, Any]] = {}
    for path, value in files.items():
        directory, filename = split_file_path(path)
        grouped.setdefault(directory, {})[filename] = value
    return grouped


def build_indexes(
    registry: ModuleRegistry, root: str, config: RoutesConfig | None = None
) -> RouteIndexes:
    """Build the read-only route, layout, and preserved indices."""
    config = config or RoutesConfig()
    root = root.rstrip("/")

    routes: dict[str, Mapping[str, RouteFile]] = {}
    for directory, files in group_by_directory(registry.routes).items():
        routes[directory] = MappingProxyType(
            {
                filename: RouteFile(
                    path=f"{directory}/{filename}",
                    directory=directory,
                    filename=filename,
                    export=default_export(module),
                )
                for filename, module in files.items()
            }
        )

    layouts: dict[str, LayoutFile] = {}
    for path, module in registry.layouts.items():
        directory, _ = split_file_path(path)
        render = default_export(module)
        if not callable(render):
            logger.debug("Layout %s has no callable export; skipping", path)
            continue
        if directory in layouts:
            msg = (
                f"Directory {directory!r} has more than one layout: "
                f"{layouts[directory].path!r} and {path!r}."
            )
            raise ConfigurationError(msg)
        layouts[directory] = LayoutFile(path=path, directory=directory, render=render)

    handlers: dict[str, dict[str, Any]] = {}
    for path, module in registry.preserved.items():
        directory, filename = split_file_path(path)
        stem, _ = _stem_and_suffix(filename)
        handler = default_export(module)
        if not callable(handler):
            logger.debug("Preserved file %s has no callable export; skipping", path)
            continue
        slot = "not_found" if stem == config.not_found_name else "error"
        handlers.setdefault(directory, {})[slot] = handler

    preserved = {
        directory: PreservedFiles(directory=directory, **slots)
        for directory, slots in handlers.items()
    }

    return RouteIndexes(
        root=root,
        routes=MappingProxyType(routes),
        layouts=MappingProxyType(layouts),
        preserved=MappingProxyType(preserved),
    )
