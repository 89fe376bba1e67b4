"""Logging configuration for the redirect shortener."""

import logging
import sys

ROOT_LOGGER = "shortener_app"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)

    Returns:
        Configured root application logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)

    # Calling twice must not duplicate output
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the application namespace"""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
