"""
Logging Configuration
Sets up the package logger for the application.
"""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "kissing"

CONSOLE_STDERR = "stderr"
CONSOLE_TEXTUAL = "textual"


def parse_level(value: str | int | None, default: int = logging.WARNING) -> int:
    """Map 'debug' / 'INFO' / 10 style values to a logging level."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    level = logging.getLevelName(str(value).strip().upper())
    return level if isinstance(level, int) else default


def _console_handler(console: str) -> logging.Handler:
    if console == CONSOLE_TEXTUAL:
        # Records go to the textual devtools console while an app is running
        from textual.logging import TextualHandler

        return TextualHandler()
    if console == CONSOLE_STDERR:
        return logging.StreamHandler(sys.stderr)
    raise ValueError(f"unknown console target: {console!r}")


def setup_logging(
    level: int = logging.WARNING,
    log_file: str | None = None,
    console: str = CONSOLE_STDERR,
) -> logging.Logger:
    """
    Configures the logger for the 'kissing' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        console: 'stderr' for terminal hosts, 'textual' while the full-screen
            app owns the terminal.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when the CLI is invoked more than once per process
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = _console_handler(console)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
