import logging
from logging import Logger
from typing import Optional

from .config import get_settings


def configure_logging(level: Optional[int] = None) -> Logger:
    """Return the shared application logger, creating its handler on first use."""
    settings = get_settings()

    logger = logging.getLogger(settings.app_name)
    if level is not None:
        logger.setLevel(level)
    if logger.handlers:
        return logger

    if level is None:
        logger.setLevel(logging.INFO)

    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(levelname)s] %(asctime)s | %(name)s | %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False

    return logger
