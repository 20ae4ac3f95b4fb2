"""
Logging Configuration
Sets up the package logger for the application.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'intervalfit' namespace.

    Args:
        level: Logging level, as a number or a name ("DEBUG", "INFO", ...).
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("intervalfit")
    logger.setLevel(level)

    # Calling twice must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
