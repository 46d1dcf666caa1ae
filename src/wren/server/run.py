"""Serve a dispatcher with pounce.

The dispatcher is a plain ASGI callable, so any ASGI server works. This
helper is the batteries-included path (``pip install wren[server]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wren.server.logs import configure_logging

if TYPE_CHECKING:
    from wren.server.dispatcher import Dispatcher


def run(app: Dispatcher, host: str | None = None, port: int | None = None) -> None:
    """Start a single-worker pounce server for *app*.

    *host* and *port* default to ``app.config.host`` / ``app.config.port``.
    Blocks until the server stops.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    cfg = app.config
    configure_logging(cfg.log_level)
    config = ServerConfig(
        host=host or cfg.host,
        port=port or cfg.port,
        workers=1,
        log_level=cfg.log_level,
    )
    server = Server(config, app)
    server.run()
