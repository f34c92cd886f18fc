"""Logging setup for the API process."""

import logging
import sys

from awc_api.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the ``awc_api`` logger tree and return the root app logger.

    Safe to call more than once; the stream handler is only attached the first time.
    """
    logger = logging.getLogger("awc_api")
    logger.setLevel((level or settings.log_level).upper())

    if not any(getattr(h, "_awc_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._awc_handler = True
        logger.addHandler(handler)

    # uvicorn access logs duplicate LoggingMiddleware output
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logger
