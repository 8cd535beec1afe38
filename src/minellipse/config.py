"""
Configuration & Global Constants
================================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It keeps the logger namespace and log formats in one place
   instead of scattering string literals through the package.
2. Deployment: It lets the log level be chosen from the environment
   (MINELLIPSE_LOG_LEVEL) without touching code.

Exports:
    LOGGER_NAMESPACE (str): Root logger name of the package.
    LOG_FORMAT (str): Format string of the log records.
    LOG_DATE_FORMAT (str): Time format of the log records.
    LOG_LEVEL_ENV (str): Name of the environment variable holding the log level.
"""
import logging
import os


# Global Constants
LOGGER_NAMESPACE: str = "minellipse"
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%H:%M:%S'
LOG_LEVEL_ENV: str = "MINELLIPSE_LOG_LEVEL"
DEFAULT_LOG_LEVEL: int = logging.WARNING

# Serialization format tag written into every saved boundary state
FORMAT_NAME: str = "minellipse.boundary"


def get_log_level(default: int = DEFAULT_LOG_LEVEL) -> int:
    """
    Get the log level from the environment.

    Accepts either a level name ("DEBUG", "info", ...) or a number.
    Unknown values fall back to `default`.
    """
    value = os.environ.get(LOG_LEVEL_ENV)
    if not value:
        return default

    value = value.strip()
    if value.isdigit():
        return int(value)

    level = logging.getLevelName(value.upper())
    if isinstance(level, int):
        return level

    print(f"WARNING: Unknown log level '{value}' in {LOG_LEVEL_ENV}, using default.")
    return default
