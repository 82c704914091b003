"""Per-request document metadata.

A ``Head`` travels with one request through the page component and
every layout in its chain. Pages set the title and add meta/link tags;
the outermost layout renders them with :meth:`Head.create_tags`.
"""

from collections.abc import Callable
from typing import Any

from warren.markup import Element, Fragment, create_element


class Head:
    """Mutable render context collecting ``<head>`` metadata.

    Usage::

        def page(request, head):
            head.set(title="About")
            head.add_meta(name="description", content="Who we are")
            return h("h1", None, "About")

        def layout(children, head):
            return h("html", None, h("head", None, head.create_tags()), h("body", None, children))
    """

    __slots__ = ("_create_element", "_fragment", "links", "meta", "title")

    def __init__(
        self,
        *,
        create_element: Callable[..., Any] = create_element,
        fragment: Any = Fragment,
    ) -> None:
        self._create_element = create_element
        self._fragment = fragment
        self.title: str | None = None
        self.meta: list[dict[str, str]] = []
        self.links: list[dict[str, str]] = []

    def __repr__(self) -> str:
        return f"<Head title={self.title!r} meta={len(self.meta)} links={len(self.links)}>"

    def set(
        self,
        *,
        title: str | None = None,
        meta: list[dict[str, str]] | None = None,
        links: list[dict[str, str]] | None = None,
    ) -> None:
        """Set the title and append meta/link attribute dicts."""
        if title is not None:
            self.title = title
        if meta:
            self.meta.extend(meta)
        if links:
            self.links.extend(links)

    def add_meta(self, **attrs: str) -> None:
        self.meta.append(attrs)

    def add_link(self, **attrs: str) -> None:
        self.links.append(attrs)

    def create_tags(self) -> Element:
        """Build ``<title>``, ``<meta>`` and ``<link>`` elements as one fragment."""
        el = self._create_element
        tags: list[Any] = []
        if self.title is not None:
            tags.append(el("title", None, self.title))
        tags.extend(el("meta", attrs) for attrs in self.meta)
        tags.extend(el("link", attrs) for attrs in self.links)
        return el(self._fragment, None, *tags)
