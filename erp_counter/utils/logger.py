"""Logging configuration for the ERP counter engine.

Counter operations bind ``sequence_code`` so every line they emit names
the counter it belongs to; other lines show ``-``.
"""

import sys
from typing import Optional

from loguru import logger
from erp_counter.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[sequence_code]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[sequence_code]} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logger(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Configure the console sink and, when a log file is set, a rotating file sink.

    Args:
        level: Minimum level (defaults to settings.log_level)
        log_file: Log file path (defaults to settings.log_file); "" disables the file sink
    """
    level = level or settings.log_level
    if log_file is None:
        log_file = settings.log_file

    logger.remove()
    logger.configure(extra={"sequence_code": "-"})

    logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        # Opened on the first record so importing the package creates no file
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            delay=True,
        )

    return logger


logger = setup_logger()
