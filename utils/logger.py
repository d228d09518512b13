# -*- coding: utf-8 -*-
"""
Logging configuration.

One "enrollment" logger feeds a rotating file (everything) and stdout
(console level from Config). Modules ask for child loggers by name.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

# Will be set by setup_logger
_logger: Optional[logging.Logger] = None

ROOT_LOGGER_NAME = "enrollment"


def _build_file_handler(config) -> logging.Handler:
    handler = RotatingFileHandler(
        config.LOG_PATH,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    return handler


def _build_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)-8s | %(message)s"))
    return handler


def setup_logger(console_level: Optional[str] = None) -> logging.Logger:
    """
    Setup application logger with file and console handlers.

    Args:
        console_level: Level name for stdout; defaults to Config.LOG_CONSOLE_LEVEL
    """
    global _logger

    # Import here to avoid circular imports
    from app.config import Config

    Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_name = (console_level or Config.LOG_CONSOLE_LEVEL).upper()
    logger.addHandler(_build_file_handler(Config))
    logger.addHandler(_build_console_handler(getattr(logging, level_name, logging.INFO)))

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a module.
    """
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger.getChild(name)
