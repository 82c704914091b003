"""Serve a router with pounce during development."""

import logging

logger = logging.getLogger("warren.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = True,
    reload_include: tuple[str, ...] = (".py", ".html"),
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Block serving *app* on ``host:port`` with a single worker.

    The router is built from a directory at runtime, so there is no
    import string to hand to ``pounce.run``. The ASGI callable goes to
    ``pounce.Server`` directly. *reload_dirs* is watched in addition to
    the working directory; pass the routes directory there.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.info("Serving %s on http://%s:%d", type(app).__name__, host, port)
    Server(
        ServerConfig(
            host=host,
            port=port,
            workers=1,
            reload=reload,
            reload_include=reload_include,
            reload_dirs=reload_dirs,
        ),
        app,
    ).run()
