# stlcodec/logging_config.py
"""
Logging for the `stlcodec` command.

The library only attaches a NullHandler. The CLI calls `setup_logging()`:
console records go to stderr, since stdout carries the mesh summary, and
an optional log file keeps every record with timestamps whatever the
console verbosity.
"""
import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "stlcodec: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Route `stlcodec.*` records to stderr and, optionally, to `log_file`.

    Without `verbose` the console only shows warnings and errors. Calling it
    again replaces the handlers of the previous call.
    """
    logger = logging.getLogger("stlcodec")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if verbose or log_file else logging.WARNING)
    return logger
