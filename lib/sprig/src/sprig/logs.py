"""Logging setup for applications embedding sprig."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure the `sprig` logger.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose: INFO level
    - Debug (SPRIG_DEBUG=1): DEBUG level - compile steps, cache hits,
      unresolved placeholders
    """
    debug = bool(os.environ.get("SPRIG_DEBUG"))

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

    logger = logging.getLogger("sprig")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
