"""Warren — file-system routes with nested layouts.

A directory tree of route files becomes a composed ASGI router. Each
directory is a sub-router; ``_layout`` files wrap every page beneath
them, and ``_404`` / ``_error`` files handle faults for their own
directory.

Basic usage::

    from warren import create_router

    router = create_router(directory="routes")

    # routes/index.py
    from warren import h

    def default(request, head):
        head.set(title="Home")
        return h("h1", None, "Hello, World!")

Serve it with ``warren run routes``.
"""

import importlib

__version__ = "0.1.0"

# Public name -> module that defines it. Resolved on first access.
_EXPORTS: dict[str, str] = {
    "create_router": "warren.pages.install",
    "Head": "warren.pages.head",
    "MountScope": "warren.pages.types",
    "Router": "warren.routing.router",
    "RoutesConfig": "warren.config",
    "Request": "warren.http.request",
    "Response": "warren.http.response",
    "html_response": "warren.http.response",
    "Element": "warren.markup",
    "Fragment": "warren.markup",
    "create_element": "warren.markup",
    "h": "warren.markup",
    "raw": "warren.markup",
    "render_to_string": "warren.markup",
    "WarrenError": "warren.errors",
    "ConfigurationError": "warren.errors",
    "HTTPError": "warren.errors",
    "MethodNotAllowed": "warren.errors",
    "NotFound": "warren.errors",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    module = _EXPORTS.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(importlib.import_module(module), name)
