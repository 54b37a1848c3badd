"""Logging setup shared by the services layer."""

from __future__ import annotations
import logging

from .secrets import get_secret

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)


def _build_handlers() -> list[logging.Handler]:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_formatter)
    handlers: list[logging.Handler] = [console_handler]

    log_file = get_secret("LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter)
        handlers.append(file_handler)
    return handlers


def get_logger(name: str = "profit_calculator") -> logging.Logger:
    """Return a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel((get_secret("LOG_LEVEL") or "INFO").upper())

    # Avoid duplicate handlers if called multiple times
    if not logger.handlers:
        for handler in _build_handlers():
            logger.addHandler(handler)

    return logger
