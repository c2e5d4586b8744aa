"""
Logging Configuration
Sets up the logger for the 'terminal_clock' namespace.
"""
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> None:
    """
    Configures the package logger.

    Console output goes to stderr through rich. Keep the level at WARNING
    while a full-screen mode runs, or send the logs to a file instead.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("terminal_clock")
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(logging.WARNING if log_file else level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
