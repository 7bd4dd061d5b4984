"""Route preview logging through loguru.

Library modules log with ``from loguru import logger``; python-markdown and its
extensions log through the standard :mod:`logging` module, which
:class:`InterceptHandler` forwards into the same sink.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Route standard library logging to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames that belong to the logging module itself.
        frame, depth = sys._getframe(), 0  # noqa: SLF001
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG when ``verbose`` else WARNING.

    stdout is left free for the rendered output. Logging from this package is
    disabled on import and switched back on here.
    """
    logger.enable("notes_preview")
    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level="DEBUG" if verbose else "WARNING",
        colorize=None,
    )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


__all__ = ["InterceptHandler", "configure_logging"]
