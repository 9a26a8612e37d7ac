"""Logging configuration helpers."""

import logging

_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai")


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging with a single stream handler.

    The AI SDKs log every HTTP request at INFO; those are raised to WARNING.
    """
    logger = logging.getLogger("food_photographer")
    logger.setLevel(level.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
