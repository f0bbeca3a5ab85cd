"""Structured logging configuration for the TechNest publication engine."""

from __future__ import annotations

import logging
import os
import sys


def setup_logging(
    level: int | None = None,
    module_name: str = "technest",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Records go to stderr; stdout is reserved for CLI output.

    Args:
        level: Logging level. Defaults to TECHNEST_LOG_LEVEL, else INFO.
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    if level is None:
        level_name = os.getenv("TECHNEST_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
