"""Structured logger setup shared by the engine and the API."""

import logging

from pythonjsonlogger import jsonlogger

from wasteops_pricing.config.settings import get_settings


def get_logger(name: str) -> logging.Logger:
    """Configure a JSON logger once and reuse it.

    The level comes from ``Settings.log_level``, so ``LOG_LEVEL`` may be set
    in the environment or in ``.env`` (default INFO).
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(get_settings().log_level.upper())
    logger.propagate = False
    return logger
