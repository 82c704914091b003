"""The request object handed to route components.

Mounted routers never mutate a request. Each router that strips a
prefix carrying parameters passes a derived copy downward, built with
:meth:`Request.with_path_params`, so a component sees the parameters
of every directory above it merged with its own.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from warren._internal.asgi import Receive
from warren.http.headers import Headers
from warren.http.query import QueryParams


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: Mapping[str, Any] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    _receive: Receive = field(default=_no_body, repr=False, compare=False)
    # One-slot list so derived copies share the body once it is read.
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"] or "/",
            headers=Headers(tuple((bytes(k), bytes(v)) for k, v in scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus the undecoded query string, if any."""
        if not self.query.raw:
            return self.path
        return f"{self.path}?{self.query.raw.decode('latin-1')}"

    def with_path_params(self, params: Mapping[str, Any]) -> Request:
        """Copy with *params* layered over the existing path parameters."""
        if not params:
            return self
        return replace(self, path_params={**self.path_params, **params})

    async def body(self) -> bytes:
        """The full body. ASGI ``receive`` is drained at most once."""
        if not self._body:
            chunks: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body.append(b"".join(chunks))
        return self._body[0]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json_module.loads(await self.body())
