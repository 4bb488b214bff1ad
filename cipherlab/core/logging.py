import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "cipherlab"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a Rich console handler to the package logger.

    Safe to call repeatedly: the handler is installed once and later calls
    only adjust the level.

    Args:
        level: Level name or number for the ``cipherlab`` logger

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
