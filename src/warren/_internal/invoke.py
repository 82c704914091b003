"""Invoke helpers — call sync or async handlers uniformly.

Warren handlers, layouts, and error pages can be ``def`` or ``async def``.
Any code that calls a user-provided function must handle both cases.
This module keeps the sync/async check and the by-name argument
injection in exactly one place.

Usage::

    from warren._internal.invoke import invoke, call_with

    result = await invoke(handler, request)
    result = call_with(layout, children=node, head=head, filename="index.py")
"""

import inspect
from collections.abc import Callable
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def call_with(func: Callable[..., Any], /, **available: Any) -> Any:
    """Call *func* with the subset of *available* values it accepts.

    Parameters are matched by name. A ``**kwargs`` parameter receives
    everything. The result is returned as-is; it may be awaitable.

    Layouts and page components use this so they only declare what
    they need::

        def layout(children):
            ...

        def layout(children, head, filename):
            ...
    """
    sig = inspect.signature(func)
    params = sig.parameters

    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
        return func(**available)

    kwargs: dict[str, Any] = {}
    for name, param in params.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.POSITIONAL_ONLY):
            continue
        if name in available:
            kwargs[name] = available[name]

    return func(**kwargs)
