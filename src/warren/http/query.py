"""Query string parameters."""

from urllib.parse import parse_qsl

from warren.http._multi import MultiValueMapping


class QueryParams(MultiValueMapping):
    """Decoded ``?a=1&a=2`` parameters. Blank values are kept as ``""``."""

    __slots__ = ("raw",)

    raw: bytes

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(tuple(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)))
        object.__setattr__(self, "raw", query_string)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Parse the first value as an int; *default* when absent or malformed."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default
