"""Exceptions raised while building or serving a route tree."""

from dataclasses import dataclass


class WarrenError(Exception):
    pass


class ConfigurationError(WarrenError):
    """The route files, layouts, or router setup cannot form a valid tree.

    Raised at build time, before any request is served.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WarrenError):
    """A failure with a status code of its own.

    Handlers raise it to end a request early. Error pages see it like
    any other exception, and the default fallback answers with
    ``status`` and ``headers``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """The path exists, just not for this method. Carries ``Allow``."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow}",
            headers=(("Allow", allow),),
        )
