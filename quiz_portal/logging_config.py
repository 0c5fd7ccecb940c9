"""Logging configuration helpers for the quiz portal."""

import logging
import os
from logging import Logger

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> Logger:
    """Configure basic logging for the application and return its logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("quiz_portal")


def get_logger(name: str) -> Logger:
    """Child logger under the ``quiz_portal`` namespace."""
    return logging.getLogger(f"quiz_portal.{name}")

