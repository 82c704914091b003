"""Route tree configuration: file naming conventions and server defaults."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoutesConfig:
    """Route tree configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutesConfig(root="/site/pages", debug=True)
    """

    # Registry keys under this prefix form the route tree
    root: str = "/app/routes"

    # Reserved file stems
    layout_name: str = "_layout"
    not_found_name: str = "_404"
    error_name: str = "_error"

    # Accepted file suffixes
    route_suffixes: tuple[str, ...] = (".py",)
    layout_suffixes: tuple[str, ...] = (".py", ".html")
    preserved_suffixes: tuple[str, ...] = (".py",)

    # Prefixed to every layout-wrapped page
    doctype: str = "<!doctype html>"

    # Show tracebacks in default 500 pages
    debug: bool = False

    # Server (``warren run``)
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = True
    log_level: str = "info"

    @property
    def reserved_names(self) -> frozenset[str]:
        """Stems that never become routes."""
        return frozenset({self.layout_name, self.not_found_name, self.error_name})
