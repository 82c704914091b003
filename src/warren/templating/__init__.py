"""Kida-backed template layouts.

A ``_layout.html`` file in a route directory is a kida template. It
renders with these variables:

- ``children``: the wrapped content, already serialized (safe markup)
- ``head``: the request's :class:`~warren.pages.head.Head`
- ``head_tags``: ``head.create_tags()`` serialized (safe markup)
- ``filename``: the route file being rendered

Example::

    <html>
      <head>{{ head_tags }}</head>
      <body><main>{{ children }}</main></body>
    </html>
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader, Markup

from warren._internal.types import RenderToString
from warren.markup import render_to_string as default_render_to_string


def create_environment(directory: str | Path, *, debug: bool = False) -> Environment:
    """Create a kida Environment loading templates from *directory*.

    Autoescaping is always on; layouts receive their content as markup.
    """
    return Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=True,
        auto_reload=debug,
    )


def template_layout(
    env: Environment,
    name: str,
    render_to_string: RenderToString = default_render_to_string,
) -> Callable[..., Markup]:
    """Wrap template *name* as a layout render function.

    The template is looked up on every call so ``auto_reload`` picks up
    edits during development.
    """

    def layout(children: Any, head: Any = None, filename: str = "") -> Markup:
        context: dict[str, Any] = {
            "children": Markup(render_to_string(children)),
            "head": head,
            "head_tags": (
                Markup(render_to_string(head.create_tags())) if head is not None else Markup("")
            ),
            "filename": filename,
        }
        return Markup(env.get_template(name).render(context))

    layout.__name__ = f"layout[{name}]"
    return layout


__all__ = ["create_environment", "template_layout"]
