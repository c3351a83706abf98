"""Logging setup for the assistant."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "bi_assistant"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Safe to call on every Streamlit rerun: existing handlers are replaced,
    not stacked.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    return root_logger
