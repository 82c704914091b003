"""Command line for inspecting and serving a routes directory.

``warren routes DIR`` prints the route table. ``warren run DIR``
serves it through pounce with reload on by default.
"""

import argparse
import logging
import sys

from warren.config import RoutesConfig

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _build_parser() -> argparse.ArgumentParser:
    defaults = RoutesConfig()

    # Options every subcommand takes.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("directory", help="Routes directory")
    common.add_argument(
        "--root", default=defaults.root, help="Registry prefix for discovered files"
    )

    parser = argparse.ArgumentParser(
        prog="warren", description="File-system routes with nested layouts."
    )
    subparsers = parser.add_subparsers(dest="command")

    routes = subparsers.add_parser("routes", parents=[common], help="List a directory's routes")
    routes.add_argument("--log-level", choices=_LOG_LEVELS, default="warning")

    run = subparsers.add_parser("run", parents=[common], help="Serve a routes directory")
    run.add_argument("--host", default=defaults.host)
    run.add_argument("--port", type=int, default=defaults.port)
    run.add_argument(
        "--no-reload", dest="reload", action="store_false", help="Do not watch for changes"
    )
    run.add_argument("--debug", action="store_true", help="Tracebacks in default error pages")
    run.add_argument("--log-level", choices=_LOG_LEVELS, default=defaults.log_level)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point of the ``warren`` script."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from warren.cli._resolve import resolve_config

    config = resolve_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Subcommands import lazily; ``run`` pulls in the server.
    if args.command == "routes":
        from warren.cli._routes import run_routes

        run_routes(args, config)
    else:
        from warren.cli._run import run_server

        run_server(args, config)
