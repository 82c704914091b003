"""Data models for the route tree.

Immutable frozen dataclasses describing route files, layouts, preserved
(not-found / error) files, and the indices built from them. Built once
at startup, read concurrently afterwards.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warren.http.response import Response
    from warren.pages.head import Head


class RouteKind(Enum):
    """The shape of a route file's default export."""

    MOUNTED_APP = "mounted_app"  # exposes dispatch(): mounted verbatim
    COMPONENT = "component"  # callable: rendered for GET
    METHOD_MAP = "method_map"  # {"GET": handler, ..., "APP": hook}


@dataclass(frozen=True, slots=True)
class ClassifiedRoute:
    """A default export tagged with its :class:`RouteKind`.

    Attributes:
        kind: Which shape the export has.
        export: The export itself.
        methods: ``(METHOD, handler)`` pairs for a method map.
        app_hook: The ``APP`` entry of a method map, if any.
    """

    kind: RouteKind
    export: Any
    methods: tuple[tuple[str, Callable[..., Any]], ...] = ()
    app_hook: Callable[..., Any] | None = None


@dataclass(frozen=True, slots=True)
class RouteFile:
    """A loaded route file.

    Attributes:
        path: Full registry path (``/app/routes/blog/[slug].py``).
        directory: Containing directory (``/app/routes/blog``).
        filename: Final path segment (``[slug].py``).
        export: The module's default export (``None`` if it has none).
    """

    path: str
    directory: str
    filename: str
    export: Any


@dataclass(frozen=True, slots=True)
class LayoutFile:
    """A directory's layout and its render function."""

    path: str
    directory: str
    render: Callable[..., Any]

    @property
    def depth(self) -> int:
        """Number of path segments; deeper layouts wrap first."""
        return len(self.path.split("/"))


@dataclass(frozen=True, slots=True)
class PreservedFiles:
    """A directory's not-found and error handlers."""

    directory: str
    not_found: Callable[..., Any] | None = None
    error: Callable[..., Any] | None = None


@dataclass(frozen=True, slots=True)
class ModuleRegistry:
    """Loaded modules, keyed by normalized path, split by convention."""

    routes: Mapping[str, Any] = field(default_factory=dict)
    layouts: Mapping[str, Any] = field(default_factory=dict)
    preserved: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RouteIndexes:
    """The three read-only indices the installer works from.

    Attributes:
        root: The route tree root directory.
        routes: directory -> filename -> RouteFile.
        layouts: directory -> LayoutFile.
        preserved: directory -> PreservedFiles.
    """

    root: str
    routes: Mapping[str, Mapping[str, RouteFile]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    layouts: Mapping[str, LayoutFile] = field(default_factory=lambda: MappingProxyType({}))
    preserved: Mapping[str, PreservedFiles] = field(
        default_factory=lambda: MappingProxyType({})
    )


RenderCallback = Callable[..., Awaitable["Response"]]


@dataclass(frozen=True, slots=True)
class MountScope:
    """What an ``APP`` hook receives next to the sub-router.

    Attributes:
        path: URL path computed for the route file.
        head: A render context created when the hook ran.
        new_head: Factory for a fresh per-request render context.
        render: ``await render(content, status=200, head=None)`` composes
            content through the directory's layouts into a Response. A
            fresh head is used when none is passed.
    """

    path: str
    head: Head
    new_head: Callable[[], Head]
    render: RenderCallback
