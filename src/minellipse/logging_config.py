"""
Logging Configuration
Sets up the package logger.
"""
import logging
import sys
from typing import Optional

from minellipse.config import LOGGER_NAMESPACE, LOG_FORMAT, LOG_DATE_FORMAT, get_log_level


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'minellipse' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO). If None,
               the level is taken from the MINELLIPSE_LOG_LEVEL environment variable.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = get_log_level()

    # Get the logger for our package
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs on repeated setup
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stderr, stdout is reserved for classification output)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
