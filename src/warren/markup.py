"""Element tree and HTML serialization.

Route components and layouts return *content*: strings, numbers,
kida ``Markup``, ``Element`` trees, or iterables of those. The default
``render_to_string`` serializes any of them to an HTML string. Plain
strings are escaped; ``Markup`` (or anything with ``__html__``) is
trusted as-is.

Usage::

    from warren.markup import h, render_to_string

    page = h("main", {"class": "post"}, h("h1", None, title), body)
    html = render_to_string(page)
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from kida import Markup
from kida.utils.html import html_escape

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Python-safe spellings of reserved attribute names
_ATTR_ALIASES = {"class_": "class", "className": "class", "for_": "for", "htmlFor": "for"}


class _FragmentType:
    """Tag marker for an element that renders only its children."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Fragment"


Fragment = _FragmentType()


@dataclass(frozen=True, slots=True)
class Element:
    """A node in the element tree.

    ``tag`` is an HTML tag name, :data:`Fragment`, or a callable
    component that receives ``props`` plus ``children`` as keyword
    arguments when rendered.
    """

    tag: str | _FragmentType | Callable[..., Any]
    props: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[Any, ...] = ()


def create_element(
    tag: str | _FragmentType | Callable[..., Any],
    props: Mapping[str, Any] | None = None,
    *children: Any,
) -> Element:
    """Build an :class:`Element` (JSX-style ``createElement``)."""
    return Element(tag=tag, props=dict(props or {}), children=children)


h = create_element


def render_to_string(content: Any) -> str:
    """Serialize *content* to an HTML string."""
    parts: list[str] = []
    _render_into(content, parts)
    return "".join(parts)


def _render_into(content: Any, out: list[str]) -> None:
    match content:
        case None | bool():
            return
        case Element():
            _render_element(content, out)
        case _ if hasattr(content, "__html__"):
            out.append(str(content.__html__()))
        case str():
            out.append(html_escape(content))
        case int() | float():
            out.append(str(content))
        case bytes():
            out.append(html_escape(content.decode("utf-8")))
        case Iterable():
            for child in content:
                _render_into(child, out)
        case _:
            out.append(html_escape(str(content)))


def _render_element(element: Element, out: list[str]) -> None:
    tag = element.tag

    if tag is Fragment:
        _render_into(element.children, out)
        return

    if callable(tag):
        props = dict(element.props)
        if element.children:
            props["children"] = element.children
        _render_into(tag(**props), out)
        return

    out.append(f"<{tag}{_render_attrs(element.props)}>")
    if tag in VOID_ELEMENTS:
        return
    _render_into(element.children, out)
    out.append(f"</{tag}>")


def _render_attrs(props: Mapping[str, Any]) -> str:
    """Render element props as an attribute string (leading space included)."""
    parts: list[str] = []
    for raw_name, value in props.items():
        if raw_name == "children" or value is None or value is False:
            continue
        name = _ATTR_ALIASES.get(raw_name, raw_name)
        if value is True:
            parts.append(f" {name}")
        else:
            text = value if isinstance(value, str) else str(value)
            parts.append(f' {name}="{html_escape(text)}"')
    return "".join(parts)


def raw(html: str) -> Markup:
    """Mark *html* as trusted markup that must not be escaped."""
    return Markup(html)
