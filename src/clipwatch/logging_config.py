"""Logging setup for clipwatch.

Call setup_logging() once at startup; modules log through
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "clipwatch"


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Pick a level from CLI flags, then CLIPWATCH_LOG_LEVEL, then WARNING."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG

    name = os.environ.get("CLIPWATCH_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route clipwatch logs to stderr through rich."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(verbose, quiet))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
