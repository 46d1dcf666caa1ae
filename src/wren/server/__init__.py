"""Serving: the dispatcher, its logging, and a pounce launcher."""

from wren.server.dispatcher import Dispatcher
from wren.server.logs import configure_logging
from wren.server.run import run

__all__ = ["Dispatcher", "configure_logging", "run"]
