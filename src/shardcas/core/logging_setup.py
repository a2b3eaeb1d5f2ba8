"""Logging configuration for CLI use.

Library modules only create loggers; handlers are installed here, once, by
the CLI entry point.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route shardcas logs to stderr through rich.

    Args:
        level: Log level name (e.g. "DEBUG", "INFO")
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger("shardcas")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
