"""Path parameter converters for ``{name:type}`` segments.

Each converter pairs the pattern a segment must match with the function
that turns the matched text into the value handlers receive::

    /users/{id:int}     -> {"id": 42}
    /docs/{rest:path}   -> {"rest": "guides/install"}
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Converter:
    pattern: str
    convert: Callable[[str], Any]

    def compile(self) -> re.Pattern[str]:
        """Anchored regex for one whole path segment."""
        return re.compile(f"^{self.pattern}$")


CONVERTERS: dict[str, Converter] = {
    "str": Converter(r"[^/]+", str),
    "int": Converter(r"\d+", int),
    "float": Converter(r"\d+(?:\.\d+)?", float),
    "path": Converter(r".+", str),
}


def convert_param(value: str, param_type: str) -> Any:
    """Convert captured segment text with the *param_type* converter.

    Raises ``KeyError`` for an unregistered converter name.
    """
    return CONVERTERS[param_type].convert(value)
