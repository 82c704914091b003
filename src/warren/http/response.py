"""Outgoing responses.

A ``Response`` is never modified in place. The ``with_*`` methods each
return an adjusted copy, so a layout or error page can decorate a
response it was handed without affecting anyone else holding it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Append *headers*. Existing entries with the same name are kept."""
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of *name*, matched case-insensitively.

        ``Content-Type`` is answered from :attr:`content_type`.
        """
        wanted = name.lower()
        for key, value in (("content-type", self.content_type), *self.headers):
            if key.lower() == wanted:
                return value
        return default

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


def html_response(markup: str, status: int = 200) -> Response:
    """An HTML page response."""
    return Response(body=markup, status=status)
