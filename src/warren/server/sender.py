"""Write a ``Response`` to an ASGI ``send`` callable."""

from warren._internal.asgi import Send
from warren.http.response import Response

# Statuses that never carry a message body.
_NO_BODY = frozenset({204, 304})


def _encode(name: str, value: str) -> tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


async def send_response(response: Response, send: Send, *, head_only: bool = False) -> None:
    """Emit the start and body messages for *response*.

    ``Content-Length`` always describes the full body, even when
    *head_only* drops the body itself.
    """
    body = b"" if response.status < 200 or response.status in _NO_BODY else response.body_bytes
    headers = [
        _encode("content-type", response.content_type),
        *(_encode(name, value) for name, value in response.headers),
        _encode("content-length", str(len(body))),
    ]
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head_only else body})
