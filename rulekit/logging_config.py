"""
Logging Setup

JSON logs by default (one object per line), plain text for interactive use.
"""

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(level: str = "INFO", fmt: str = "json", logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for RuleKit.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        fmt: "json" or "text"
        logger_name: Logger to configure (root logger when None)

    Returns:
        The configured logger
    """
    log_handler = logging.StreamHandler()
    if fmt == "json":
        log_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        log_handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger(logger_name)
    logger.handlers = [log_handler]
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    return logger
