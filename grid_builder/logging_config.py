"""Structured logging for Grid Builder.

JSON records go to ``<log_dir>/grid_builder.log`` (10MB rotation, 5 backups)
and a short human-readable line goes to stdout. Context passed through
``log_with_context`` ends up as top-level JSON fields.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

LOG_FILE_NAME = "grid_builder.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(module)s %(lineno)d"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Chatty third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _json_file_handler(log_path: Path) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        log_path / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            JSON_FORMAT,
            rename_fields={"levelname": "level", "name": "logger"},
            static_fields={"service": "grid_builder"},
            timestamp=True,
        )
    )
    # The file keeps everything; the root level decides what reaches it
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    handler.setLevel(level)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: str | Path = "logs") -> logging.Logger:
    """Install the JSON file and console handlers on the root logger.

    Calling it again replaces the previous handlers.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the rotating JSON log, created if missing

    Returns:
        The root logger
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_json_file_handler(log_path))
    root_logger.addHandler(_console_handler(level))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with structured fields.

    Args:
        logger: Logger to write to
        level: debug, info, warning, error or critical
        message: Log message
        **extra_fields: JSON fields such as workspace_id, grid_id, event_type
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
