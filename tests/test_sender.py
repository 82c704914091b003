"""Tests for warren.server.sender — Response to ASGI messages."""

from typing import Any

from warren.http.response import Response
from warren.server.sender import send_response


class _Recorder:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def headers(self) -> dict[bytes, bytes]:
        return dict(self.messages[0]["headers"])


class TestSendResponse:
    async def test_start_and_body(self) -> None:
        send = _Recorder()
        await send_response(Response("héllo", status=201), send)
        start, body = send.messages
        assert start["type"] == "http.response.start"
        assert start["status"] == 201
        assert body == {"type": "http.response.body", "body": "héllo".encode()}
        assert send.headers[b"content-type"] == b"text/html; charset=utf-8"
        assert send.headers[b"content-length"] == str(len("héllo".encode())).encode()

    async def test_extra_headers_lowercased(self) -> None:
        send = _Recorder()
        await send_response(Response("x").with_header("X-Custom", "1"), send)
        assert send.headers[b"x-custom"] == b"1"

    async def test_no_body_for_204(self) -> None:
        send = _Recorder()
        await send_response(Response("ignored", status=204), send)
        assert send.messages[1]["body"] == b""
        assert send.headers[b"content-length"] == b"0"

    async def test_head_only_keeps_length(self) -> None:
        send = _Recorder()
        await send_response(Response("abc"), send, head_only=True)
        assert send.messages[1]["body"] == b""
        assert send.headers[b"content-length"] == b"3"
