"""Logging setup for SmartCalc."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    """Route the smartcalc loggers through rich on stderr.

    Args:
        level: Level name such as "DEBUG" or "WARNING". Unknown names
            fall back to WARNING.
    """
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logger = logging.getLogger("smartcalc")
    logger.setLevel(numeric)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
