"""
Centralized logging configuration using loguru.
"""
import os
import sys
import logging
from loguru import logger
from typing import Any


DEFAULT_LOG_LEVEL = "INFO"

# Default format for standard output
DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# A simpler format for the command line, where the caller location is noise
SIMPLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

# HTTP stack is chatty at DEBUG
MODULE_LOG_LEVELS = {
    "urllib3": "WARNING",
    "urllib3.connectionpool": "WARNING",
    "requests": "WARNING",
    "charset_normalizer": "WARNING",
}


class InterceptHandler(logging.Handler):
    """
    Intercepts standard library logging and routes it through loguru.
    requests/urllib3 log through the standard library.
    """
    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(log_level: str | None = None, simple: bool = False) -> None:
    """
    Configure loguru logger with the specified settings.

    Args:
        log_level: The log level to use. If None, uses LOG_LEVEL env var or INFO.
        simple: Use the short format (command line usage).
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = log_level.upper()

    logger.remove()

    logger.add(
        sys.stderr,
        format=SIMPLE_FORMAT if simple else DEFAULT_FORMAT,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = os.getenv("LOG_FILE")
    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            format=DEFAULT_FORMAT,
            level=log_level,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for module, level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module).setLevel(getattr(logging, level))


def get_logger(name: str) -> Any:
    """
    Get a logger bound to the given module name.

    Args:
        name: The module name

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


__all__ = ["logger", "configure_logging", "get_logger"]
