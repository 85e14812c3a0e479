"""
Loguru configuration.

One stderr sink with a per-module column, and stdlib loggers of the
libraries we run under (uvicorn, apscheduler, telegram, httpx) routed
into it.
"""

import inspect
import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]: <14}</cyan> | "
    "<level>{message}</level>"
)

INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "apscheduler",
    "telegram",
    "httpx",
)


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames belonging to the logging module itself
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.bind(module=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def configure_logging(level: str = "INFO") -> None:
    """
    Install the loguru sink and intercept library loggers.

    Safe to call more than once; the sink is replaced each time.

    Args:
        level: Minimum level (e.g., "DEBUG", "INFO")
    """
    logger.remove()
    logger.configure(extra={"module": "Server"})
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
