"""
Logging setup for flash_window.

Library modules only create module loggers (``logging.getLogger(__name__)``);
handlers are installed by the application, normally the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "flash_window"

_FORMAT = "%(asctime)s %(levelname)-8s [%(module)s.%(funcName)s:%(lineno)d] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.WARNING,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Calling it again replaces the handler installed by a previous call, so the
    CLI can be invoked repeatedly (tests) without duplicating output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_flash_window", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    handler._flash_window = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
