"""Logging setup shared by the command-line entry points.

Usage:
    from diedrico.logging_config import setup_logging
    setup_logging()  # once, at the entry point
"""

import logging
import sys
from logging.handlers import RotatingFileHandler


DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

MAX_BYTES = 2 * 1024 * 1024  # 2 MB
BACKUP_COUNT = 3


def setup_logging(level=logging.WARNING, log_file=None, fmt=DEFAULT_FORMAT):
    """Configure the root logger.

    Library modules only create module loggers; nothing is emitted until an
    entry point calls this. When *log_file* is given a RotatingFileHandler
    is added next to the stderr handler.
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
        )
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)
