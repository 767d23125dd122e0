# core/logging_config.py

import logging

from core.config import LOG_FORMAT


def configure_logging(level: int = logging.INFO) -> None:
    """
    Installs a root handler using the program-wide log format.

    Safe to call more than once; `logging.basicConfig` is a no-op when the root logger
    already has handlers.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
