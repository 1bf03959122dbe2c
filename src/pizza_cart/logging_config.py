from __future__ import annotations

import logging

from pizza_cart.config import Settings

ROOT_LOGGER = "pizza_cart"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach one console handler to the package logger; safe to call twice."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.log_level.upper())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(fmt=settings.log_format, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    return logger
