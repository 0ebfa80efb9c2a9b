"""
Logging utilities for the bot.
Uses Rich for colored console output.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO (20) and WARNING (30)
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

# Custom theme for logging
CUSTOM_THEME = Theme({
    "logging.level.success": "green",
    "logging.level.command": "cyan",
    "logging.level.debug": "dim cyan",
})

console = Console(theme=CUSTOM_THEME)


class CustomLogger(logging.Logger):
    """Logger with an extra SUCCESS level."""

    def success(self, message: str, *args, **kwargs) -> None:
        """Log a success message."""
        if self.isEnabledFor(SUCCESS):
            self._log(SUCCESS, message, args, **kwargs)


logging.setLoggerClass(CustomLogger)

_default_level = logging.INFO
_loggers: Dict[str, CustomLogger] = {}


def set_default_level(level: int) -> None:
    """Change the level of every logger set up here, and of those set up later."""
    global _default_level
    _default_level = level

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def setup_logging(name: str, level: Optional[int] = None) -> CustomLogger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: INFO, or DEBUG when enabled in config)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = _default_level

    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    _loggers[name] = logger

    return logger


class LoggerMixin:
    """Mixin class that provides logger functionality."""

    def __init__(self, name: str):
        self._logger = setup_logging(name)

    @property
    def logger(self) -> CustomLogger:
        """Get the logger instance."""
        return self._logger


# Convenience function
def get_logger(name: str) -> CustomLogger:
    """Get a logger instance."""
    return setup_logging(name)
