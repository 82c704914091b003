"""Layout resolution.

One ordering rule for every caller: the deepest layout is innermost,
the shallowest outermost. Both lookups below share :func:`ancestors`,
which walks from a directory up to the configured root by popping one
path segment at a time.

Example tree::

    /app/routes/_layout.py          (A)
    /app/routes/blog/_layout.py     (B)
    /app/routes/blog/2024/post.py

    nearest_layout("/app/routes/blog/2024", ...)  -> B
    layout_chain("/app/routes/blog/2024", ...)    -> [B, A]
"""

from collections.abc import Iterable, Iterator, Mapping

from warren.pages.types import LayoutFile


def ancestors(directory: str, root: str) -> Iterator[str]:
    """Yield *directory* and each ancestor up to and including *root*.

    Stops after *root*. A directory outside *root* yields only itself.
    """
    root = root.rstrip("/")
    segments = directory.rstrip("/").split("/")
    root_segments = root.split("/")

    inside = segments[: len(root_segments)] == root_segments
    while segments:
        yield "/".join(segments)
        if not inside or len(segments) <= len(root_segments):
            return
        segments.pop()


def nearest_layout(
    directory: str, layouts: Mapping[str, LayoutFile], root: str
) -> LayoutFile | None:
    """The layout at *directory*, or at its nearest ancestor within *root*."""
    for candidate in ancestors(directory, root):
        layout = layouts.get(candidate)
        if layout is not None:
            return layout
    return None


def layout_chain(
    directory: str, layouts: Mapping[str, LayoutFile], root: str
) -> list[LayoutFile]:
    """Every layout from *directory* up to *root*, deepest first."""
    return [
        layout
        for candidate in ancestors(directory, root)
        if (layout := layouts.get(candidate)) is not None
    ]


def order_layouts(layouts: Iterable[LayoutFile]) -> list[LayoutFile]:
    """Sort *layouts* deepest first. Ties keep their given order."""
    return sorted(layouts, key=lambda layout: layout.depth, reverse=True)
