"""Logging setup for the gastos command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich on stderr.

    Args:
        verbose: Log DEBUG and up instead of WARNING and up.
    """
    global _CONFIGURED

    level = logging.DEBUG if verbose else logging.WARNING
    root_logger = logging.getLogger("gastos")
    root_logger.setLevel(level)

    if _CONFIGURED:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _CONFIGURED = True
