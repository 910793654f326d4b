"""Logging helpers for flagfield.

The library only emits DEBUG records through ``logging.getLogger(__name__)``
loggers and never installs handlers; applications opt in here.
"""

from __future__ import annotations

import logging


def setup_structured_logging(level: int = logging.INFO, logger_name: str = "") -> None:
    """Configure a logger (the root logger by default) to emit JSON formatted messages."""

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"component": "%(name)s", "message": "%(message)s"}'
        )
    )
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    logger.setLevel(level)
