"""Logging setup for serving wren from the command line.

Library code only ever calls ``logging.getLogger("wren.server")``; this
module is for the process that owns the root logger.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "info") -> logging.Logger:
    """Send ``wren.*`` records to stderr at *level*.

    Calling it twice does not duplicate output.
    """
    logger = logging.getLogger("wren")
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]
    logger.setLevel(level)
    if not any(getattr(h, "_wren", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._wren = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
