"""Filesystem discovery for a routes directory.

Walks the directory tree and loads every file the route conventions
recognise into a flat registry keyed by normalized path::

    site/routes/index.py          -> /app/routes/index.py
    site/routes/blog/[slug].py    -> /app/routes/blog/[slug].py
    site/routes/blog/_layout.html -> /app/routes/blog/_layout.html

``.py`` files are imported as modules. ``_layout.html`` files become
kida template layouts. Directories starting with ``_`` or ``.`` are
skipped; bracketed directory names (``[id]``) are kept as-is so the
installer can turn them into path parameters.
"""

import importlib.util
import logging
import re
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType
from typing import Any

from warren.config import RoutesConfig
from warren.errors import ConfigurationError
from warren.templating import create_environment, template_layout

logger = logging.getLogger("warren.pages")

_MODULE_NAME_RE = re.compile(r"\W")


def discover_modules(
    directory: str | Path,
    *,
    root: str | None = None,
    config: RoutesConfig | None = None,
) -> dict[str, Any]:
    """Load every route, layout, and preserved file under *directory*.

    Args:
        directory: Routes directory on disk.
        root: Registry prefix the relative paths are joined to.
        config: Naming conventions (defaults to ``RoutesConfig()``).

    Returns:
        ``{normalized_path: module}``. Template layouts map to their
        render function.
    """
    config = config or RoutesConfig()
    base = Path(directory).resolve()
    if not base.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {base}")

    prefix = (root if root is not None else config.root).rstrip("/")
    suffixes = {*config.route_suffixes, *config.layout_suffixes, *config.preserved_suffixes}
    env = None
    modules: dict[str, Any] = {}

    for file in _walk(base):
        if file.suffix not in suffixes:
            continue
        if file.name.startswith(("_", ".")) and file.stem not in config.reserved_names:
            continue

        relative = file.relative_to(base).as_posix()
        key = f"{prefix}/{relative}"

        if file.suffix == ".html":
            if file.stem != config.layout_name:
                continue
            if env is None:
                env = create_environment(base, debug=config.debug)
            modules[key] = template_layout(env, relative)
        else:
            modules[key] = _load_module(file, relative)

    logger.debug("Discovered %d files under %s", len(modules), base)
    return modules


def _walk(directory: Path) -> Iterator[Path]:
    """Yield files depth-first in sorted order, skipping hidden/private dirs."""
    for item in sorted(directory.iterdir()):
        if item.is_dir():
            if item.name.startswith(("_", ".")):
                continue
            yield from _walk(item)
        elif item.is_file():
            yield item


def _load_module(file: Path, relative: str) -> ModuleType:
    """Import a route file by path."""
    module_name = "_warren_route_" + _MODULE_NAME_RE.sub("_", relative)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load route file {file}"
        raise ConfigurationError(msg)
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Cannot import route file {file}: {exc}"
        raise ConfigurationError(msg) from exc
    return module
