"""Logging setup for readmark.

Log records go to stderr through rich, so stdout carries only converted
content.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings, settings

_HANDLER_NAME = "readmark-rich"


def configure_logging(config: Settings | None = None, level: str | None = None) -> None:
    """Install the stderr log handler on the ``readmark`` logger.

    Safe to call more than once; the handler is replaced, not duplicated.

    Args:
        config: Settings to read level and format from (default: global settings)
        level: Explicit level overriding the configured one
    """
    config = config or settings
    logger = logging.getLogger("readmark")

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=config.debug,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(config.log_format))

    logger.addHandler(handler)
    logger.setLevel((level or ("DEBUG" if config.debug else config.log_level)).upper())
