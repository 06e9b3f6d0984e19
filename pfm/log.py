"""Logging setup for the command line client."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import LogConfig

LOGGER_NAME = "pfm"
LIBRARY_LOGGERS = ("urllib3", "requests")


def _drop_rich_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)


def configure_logging(
    config: LogConfig,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Route ``pfm`` log records to stderr at the level ``config`` selects.

    Calling it again replaces the handler instead of adding a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _drop_rich_handlers(logger)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=config.verbosity >= 2,
        show_path=config.verbosity >= 2,
    )
    handler.setLevel(config.level)
    logger.addHandler(handler)
    logger.setLevel(config.level)
    logger.propagate = False

    for name in LIBRARY_LOGGERS:
        library = logging.getLogger(name)
        _drop_rich_handlers(library)
        library.setLevel(config.library_level)
        if config.library_level <= logging.DEBUG:
            library.addHandler(handler)

    return logger
