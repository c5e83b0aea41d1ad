"""Shared utilities"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure logging for curly.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose: INFO level
    - Debug (CURLY_DEBUG=1): DEBUG level - shows every macro dispatch
    """
    debug = bool(os.environ.get("CURLY_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("curly")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger
