"""Fallback responses for failures nobody handled.

The router calls :func:`call_error_handler` for each interceptor it
passes on the way out. When the exception escapes every router, one
of the two default pages below is sent instead.
"""

import html
import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from warren._internal.invoke import invoke
from warren.errors import HTTPError
from warren.http.request import Request
from warren.http.response import Response

logger = logging.getLogger("warren.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: BaseException,
) -> Any:
    """Call *handler* positionally with as many of ``(request, exc)`` as it takes."""
    arity = len(inspect.signature(handler).parameters)
    return await invoke(handler, *(request, exc)[:arity])


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    message = str(exc) if debug and exc.detail else exc.detail or f"Error {exc.status}"
    return Response(body=html.escape(message), status=exc.status, headers=exc.headers)


def handle_internal_error(exc: Exception, request: Request, *, debug: bool = False) -> Response:
    """A plain 500. In debug mode the escaped traceback is the body."""
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    if not debug:
        return Response(body="Internal Server Error", status=500)
    trace = html.escape("".join(traceback.format_exception(exc)))
    return Response(body=f'<pre class="warren-error">{trace}</pre>', status=500)
