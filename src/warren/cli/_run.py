"""``warren run`` — development server command.

Discovers the routes directory, builds the router, and serves it with
pounce. The routes directory is watched for changes when reload is on.
"""

import argparse
from pathlib import Path

from warren.cli._resolve import resolve_router
from warren.config import RoutesConfig


def run_server(args: argparse.Namespace, config: RoutesConfig) -> None:
    """Serve ``args.directory`` on ``config.host:config.port``."""
    router = resolve_router(args, config)

    from warren.server.dev import run_dev_server

    run_dev_server(
        router,
        config.host,
        config.port,
        reload=config.reload,
        reload_dirs=(str(Path(args.directory).resolve()),),
    )
