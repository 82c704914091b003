"""File-system route composition with nested layouts.

The directory tree defines URL paths, layout nesting, and which
not-found / error pages apply where.

Usage::

    from warren import create_router

    router = create_router(directory="routes")

Conventions:

    routes/
      _layout.py         # Root layout (wraps every page)
      _404.py            # Default not-found page
      _error.py          # Default error page
      index.py           # GET /
      about.py           # GET /about
      blog/
        _layout.html     # Nested layout (kida template)
        _404.py          # Not-found page for /blog/*
        [slug].py        # GET /blog/{slug}
      api/
        items.py         # default = Router() mounted at /api/items
"""

from warren.pages.classify import classify, default_export
from warren.pages.compose import Composer
from warren.pages.discovery import discover_modules
from warren.pages.head import Head
from warren.pages.index import build_indexes, group_by_directory, partition_modules
from warren.pages.install import RouteInstaller, create_router
from warren.pages.layouts import ancestors, layout_chain, nearest_layout, order_layouts
from warren.pages.types import (
    ClassifiedRoute,
    LayoutFile,
    ModuleRegistry,
    MountScope,
    PreservedFiles,
    RouteFile,
    RouteIndexes,
    RouteKind,
)

__all__ = [
    "ClassifiedRoute",
    "Composer",
    "Head",
    "LayoutFile",
    "ModuleRegistry",
    "MountScope",
    "PreservedFiles",
    "RouteFile",
    "RouteIndexes",
    "RouteInstaller",
    "RouteKind",
    "ancestors",
    "build_indexes",
    "classify",
    "create_router",
    "default_export",
    "discover_modules",
    "group_by_directory",
    "layout_chain",
    "nearest_layout",
    "order_layouts",
    "partition_modules",
]
