"""Structured logging configuration for query-string token authentication.

Console output is human-readable by default and can be switched to JSON.
When a log directory is given, JSON records are also written to
``<log_dir>/query_token_auth.log`` with 10MB rotation and 5 backups.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d"


def _json_formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(JSON_FORMAT, timestamp=True)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure structured logging with console output and optional JSON file output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Console format, "text" or "json"
        log_dir: Directory for the rotating JSON log file (no file logging if None)

    Returns:
        Configured root logger instance
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    root_logger.handlers.clear()

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        json_handler = RotatingFileHandler(
            log_dir / "query_token_auth.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        json_handler.setFormatter(_json_formatter())
        json_handler.setLevel(logging.DEBUG)  # Capture all levels to file
        root_logger.addHandler(json_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if log_format.lower() == "json":
        console_handler.setFormatter(_json_formatter())
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    # uvicorn's own access log prints the raw request line, token included
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance configured for structured logging
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log a message with additional structured context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **extra_fields: Additional fields to include in JSON log (e.g. request_id, event_type)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra_fields)
