"""Build configuration and a router from CLI arguments."""

import argparse
import sys

from warren.config import RoutesConfig
from warren.errors import WarrenError
from warren.pages import create_router
from warren.routing import Router


def resolve_config(args: argparse.Namespace) -> RoutesConfig:
    """``RoutesConfig`` from parsed arguments. Options a subcommand lacks keep their defaults."""
    defaults = RoutesConfig()
    return RoutesConfig(
        root=args.root,
        debug=getattr(args, "debug", defaults.debug),
        host=getattr(args, "host", defaults.host),
        port=getattr(args, "port", defaults.port),
        reload=getattr(args, "reload", defaults.reload),
        log_level=args.log_level,
    )


def resolve_router(args: argparse.Namespace, config: RoutesConfig) -> Router:
    """Discover ``args.directory`` and build its router.

    Exits with status 1 and a message on stderr when the directory is
    missing or the route tree is misconfigured.
    """
    try:
        return create_router(directory=args.directory, config=config)
    except (FileNotFoundError, WarrenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
