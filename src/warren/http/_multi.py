"""Read-only mapping over ordered ``(key, value)`` pairs.

Headers and query strings both allow a key to repeat. Indexing returns
the first value; ``get_list`` returns them all in arrival order.
"""

from collections.abc import Iterator, Mapping


class MultiValueMapping(Mapping[str, str]):
    __slots__ = ("_pairs",)

    _pairs: tuple[tuple[str, str], ...]

    def __init__(self, pairs: tuple[tuple[str, str], ...] = ()) -> None:
        object.__setattr__(self, "_pairs", tuple((self._fold(k), v) for k, v in pairs))

    @staticmethod
    def _fold(key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        wanted = self._fold(key)
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._pairs)!r})"

    def get_list(self, key: str) -> list[str]:
        wanted = self._fold(key)
        return [value for name, value in self._pairs if name == wanted]

