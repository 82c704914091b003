"""Route module classification.

A route file's default export takes one of three shapes. The shape is
decided by capability, not by type: anything with an async
``dispatch()`` is a mounted app, anything else callable is a page
component, and a mapping of method names is a method map.
"""

import logging
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from warren.pages.types import ClassifiedRoute, RouteKind
from warren.routing import HTTP_METHODS, is_mountable

logger = logging.getLogger("warren.pages")

APP_KEY = "APP"


def default_export(module: Any) -> Any:
    """Return the default export of a loaded route module.

    The export is the ``default`` attribute (or mapping key). A module
    without one gets a method map built from its module-level callables
    named after HTTP methods, plus ``APP``::

        # routes/contact.py
        def GET(request): ...
        def POST(request): ...

    Any other value without a ``default`` (a function, a router) is its
    own export. Returns ``None`` when a module exports nothing usable.
    """
    if isinstance(module, Mapping):
        return module.get("default")

    export = getattr(module, "default", None)
    if export is not None:
        return export

    if not isinstance(module, ModuleType):
        return module

    methods = {
        name: value
        for name in (*sorted(HTTP_METHODS), APP_KEY)
        if callable(value := getattr(module, name, None))
    }
    return methods or None


def classify(export: Any) -> ClassifiedRoute | None:
    """Tag *export* with its :class:`RouteKind`, or ``None`` if unusable."""
    if export is None:
        return None

    if is_mountable(export):
        return ClassifiedRoute(kind=RouteKind.MOUNTED_APP, export=export)

    if callable(export):
        return ClassifiedRoute(kind=RouteKind.COMPONENT, export=export)

    if isinstance(export, Mapping):
        methods: list[tuple[str, Any]] = []
        app_hook = None
        for key, handler in export.items():
            if handler is None:
                continue
            name = str(key).upper()
            if name == APP_KEY:
                app_hook = handler
            else:
                methods.append((name, handler))
        return ClassifiedRoute(
            kind=RouteKind.METHOD_MAP,
            export=export,
            methods=tuple(methods),
            app_hook=app_hook,
        )

    logger.debug("Unrecognized route export %r; skipping", export)
    return None
