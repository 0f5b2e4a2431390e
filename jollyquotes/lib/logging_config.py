"""Structured logging for jollyquotes.

Library modules log through ``logging.getLogger(__name__)``. Calls that
know which API, URL or tag they are working on attach those values with
log_with_context(); the JSON formatter installed by setup_logging() turns
them into top-level keys, so a download log line looks like:

    {"level": "INFO", "message": "Downloading random quote", "api_name": "quotable", "tag": "wisdom", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from jollyquotes.lib.config_manager import config

# Record attributes carrying log_with_context() fields start with this prefix
CONTEXT_PREFIX = "ctx_"

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class StructuredFormatter(logging.Formatter):
    """Formats each record as a single JSON object."""

    def __init__(self, app_name: str = "jollyquotes"):
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": self.app_name,
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        for key, value in record.__dict__.items():
            if key.startswith(CONTEXT_PREFIX):
                log_data[key[len(CONTEXT_PREFIX):]] = value

        if record.exc_info and record.exc_info[0]:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


def setup_logging(
    level: Optional[str] = None,
    app_name: str = "jollyquotes",
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Send every log record to stream as JSON lines.

    Replaces the root logger's handlers, so calling it twice does not
    duplicate output.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive).
            Defaults to JOLLYQUOTES_LOG_LEVEL.
        app_name: Value of the "app" key in every record
        stream: Output stream (defaults to stderr, keeping stdout for quotes)

    Returns:
        The installed handler

    Raises:
        ValueError: If level is not a known level name
    """
    level_name = (level or config.get("JOLLYQUOTES_LOG_LEVEL")).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level_name}'")

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter(app_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def log_with_context(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log message with structured fields.

    Args:
        logger: Module logger
        level: logging level constant (logging.INFO, ...)
        message: Human readable message
        **fields: Values emitted as top-level JSON keys (api_name, url, tag...)
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={f"{CONTEXT_PREFIX}{key}": value for key, value in fields.items()})
