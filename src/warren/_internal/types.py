"""Shared type aliases used across warren modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Router-level handler: Request in, Response (or str/bytes) out, sync or async
Handler: TypeAlias = Callable[..., Any]

# Error interceptor: (request, exc), (request) or ()
ErrorHandler: TypeAlias = Callable[..., Any]


# Content serializer: content in, markup string out
RenderToString: TypeAlias = Callable[[Any], str]
