"""Logging helpers."""

from __future__ import annotations

import logging
import sys

from kts_analyzer import config


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger("kts_analyzer")
    if logger.handlers:
        return logger

    logger.setLevel(level or config.LOG_LEVEL)
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
