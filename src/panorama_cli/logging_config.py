"""Logging setup for the command line entry point."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "panorama_cli"


def configure_logging(verbosity: int = 0) -> None:
    """Route this package's log records to stderr through rich.

    ``0`` shows warnings, ``1`` adds operational command descriptions and
    ``2`` or more adds the raw XML exchanged with the device.
    """

    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
