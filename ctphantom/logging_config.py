"""Logging configuration for the ctphantom package.

The library only creates module loggers; nothing is configured on import.
Call :func:`setup_logging` from an application or script to see the debug
and ``show_mem`` output.
"""

import logging
import sys
from typing import Optional

_PACKAGE_LOGGER = "ctphantom"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``ctphantom`` logger.

    Parameters
    ----------
    level : int, optional
        Logging level, e.g. ``logging.DEBUG`` (default: ``logging.INFO``).
    log_file : str, optional
        Also write log records to this file.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)

    # Drop handlers from a previous call to avoid duplicate records
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
