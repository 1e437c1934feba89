"""
Logging setup for host applications embedding the ecommerce client
"""
import logging
import sys
from typing import Optional

from kivio_ecommerce.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a console handler to the package logger

    Args:
        level: Log level name. Defaults to settings.LOG_LEVEL

    Returns:
        The configured 'kivio_ecommerce' logger
    """
    logger = logging.getLogger("kivio_ecommerce")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_kivio_console", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._kivio_console = True
        logger.addHandler(handler)

    return logger
