"""Rendering composer: wrap content in layouts and produce a Response.

Given a handler's result and the layout chain for its directory, the
composer applies the layouts deepest first, so the shallowest layout
ends up outermost, serializes the tree, and prefixes the doctype::

    result             <article>…</article>
    blog/_layout       <section>result</section>
    _layout            <html><body>section</body></html>

A handler that returns a ``Response`` bypasses all of this.
"""

import inspect
from collections.abc import Mapping, Sequence
from typing import Any

from warren._internal.invoke import call_with
from warren._internal.types import RenderToString
from warren.http.response import Response, html_response
from warren.pages.head import Head
from warren.pages.layouts import order_layouts
from warren.pages.types import LayoutFile


class Composer:
    """Compose handler output through layouts into HTML responses.

    Args:
        layouts: The directory -> layout index.
        root: Route tree root; its layout wraps output that has no chain.
        render_to_string: Content serializer.
        doctype: Prefixed to every layout-wrapped document.
    """

    __slots__ = ("_doctype", "_layouts", "_render_to_string", "_root")

    def __init__(
        self,
        layouts: Mapping[str, LayoutFile],
        root: str,
        render_to_string: RenderToString,
        doctype: str = "<!doctype html>",
    ) -> None:
        self._layouts = layouts
        self._root = root.rstrip("/")
        self._render_to_string = render_to_string
        self._doctype = doctype

    @property
    def root_layout(self) -> LayoutFile | None:
        return self._layouts.get(self._root)

    async def compose(
        self,
        result: Any,
        status: int = 200,
        *,
        layouts: Sequence[LayoutFile] | None = None,
        head: Head,
        filename: str = "",
    ) -> Response:
        """Turn *result* into a Response at *status*."""
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, Response):
            return result

        chain = order_layouts(layouts) if layouts else []
        if not chain and (root_layout := self.root_layout) is not None:
            chain = [root_layout]

        if not chain:
            return html_response(await self._serialize(result), status)

        node = result
        for layout in chain:
            node = call_with(layout.render, children=node, head=head, filename=filename)
            if inspect.isawaitable(node):
                node = await node

        markup = await self._serialize(node)
        return html_response(self._doctype + markup, status)

    async def _serialize(self, content: Any) -> str:
        markup = self._render_to_string(content)
        if inspect.isawaitable(markup):
            markup = await markup
        return markup
