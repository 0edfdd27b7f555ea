"""
Logging setup for command line use.

Library modules only create module-level loggers; handlers are attached
here by the entry point.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a stream handler to the package logger.

    Args:
        verbose: Log DEBUG records (regime selection, skipped ops) when True.
        stream: Output stream. Defaults to stderr.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger("stretchable_image")
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def detach_handler(handler: logging.Handler) -> None:
    """Remove a handler attached by configure_logging()."""
    logging.getLogger("stretchable_image").removeHandler(handler)
