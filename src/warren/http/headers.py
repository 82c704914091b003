"""Request headers, decoded from the ASGI scope's byte pairs."""

from collections.abc import Mapping

from warren.http._multi import MultiValueMapping


class Headers(MultiValueMapping):
    """Case-insensitive header lookup. Names are stored lowercased."""

    __slots__ = ()

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        super().__init__(
            tuple((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)
        )

    @staticmethod
    def _fold(key: str) -> str:
        return key.lower()

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        return cls(
            tuple((name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())
        )
