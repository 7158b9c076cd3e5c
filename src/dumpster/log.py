"""Logging setup for the command line.

Library modules only call ``logging.getLogger(__name__)``; this module
attaches a rich handler to the ``dumpster`` logger once per process.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dumpster"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route ``dumpster.*`` log records to stderr through rich.

    Args:
        verbose: Log DEBUG records as well as INFO and above.
        console: Console to render on (default: a stderr console).

    Returns:
        The configured ``dumpster`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)

    return logger
