"""
Logging setup for bundler-gas.

Module loggers are children of the ``bundler_gas`` logger, which owns the
console handler. ``configure_logging`` applies the ``logging`` section of a
bundler config to that one logger.
"""

import logging
import sys

ROOT_LOGGER_NAME = "bundler_gas"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_formatter)
        root.addHandler(console_handler)
        root.setLevel(logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the bundler_gas hierarchy.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger whose records reach the bundler_gas handlers
    """
    _root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", filename: str | None = None) -> None:
    """Apply a log level and optional log file to all bundler_gas loggers.

    Calling it again replaces the previously configured file handler.

    Args:
        level: One of LOG_LEVELS
        filename: Path of a log file to append to, or None for console only
    """
    if level not in LOG_LEVELS:
        raise ValueError(f"Log level must be one of {list(LOG_LEVELS)}, got {level!r}")

    root = _root_logger()
    root.setLevel(level)

    for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(handler)
        handler.close()

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(_formatter)
        root.addHandler(file_handler)
