"""
AppBuilder Stream SDK - Structured Logging

Structured logging for the SDK and the command-line decoder.

The library never installs handlers on import. Applications that want JSON
logs call ``setup_logging`` once at startup; otherwise records propagate to
whatever the host application configured.

Usage:
    from appbuilder_stream.observability import setup_logging, get_logger

    setup_logging(level="DEBUG")

    logger = get_logger(__name__)
    logger.debug("Stream exhausted", request_id="req_123")

Output:
    {"timestamp": "2024-01-15T10:30:00+00:00", "level": "DEBUG",
     "logger": "appbuilder_stream.iterators", "message": "Stream exhausted",
     "request_id": "req_123"}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Union


# LogRecord attributes that are not user supplied extras
_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename",
    "funcName", "levelname", "levelno", "lineno",
    "module", "msecs", "pathname", "process",
    "processName", "relativeCreated", "stack_info",
    "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
}


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.123456+00:00",
        "level": "INFO",
        "logger": "module.name",
        "message": "Log message",
        "request_id": "req_abc123",
        ... additional fields
    }
    """

    # Fields to redact from logs
    SENSITIVE_FIELDS = {
        "password", "secret", "token", "api_key", "apikey",
        "authorization", "credential", "private_key",
    }

    def __init__(
        self,
        include_location: bool = False,  # filename:lineno
        redact_sensitive: bool = True,
    ):
        super().__init__()
        self.include_location = include_location
        self.redact_sensitive = redact_sensitive

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_location:
            log_data["location"] = f"{record.filename}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if self.redact_sensitive and self._is_sensitive(key):
                value = "[REDACTED]"
            log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)

    def _is_sensitive(self, field_name: str) -> bool:
        """Check if field name indicates sensitive data."""
        field_lower = field_name.lower()
        return any(sensitive in field_lower for sensitive in self.SENSITIVE_FIELDS)


class StructuredLogger:
    """
    Structured logger wrapper.

    Keyword arguments other than the stdlib ones become ``extra`` fields.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, *args, **kwargs):
        if not self._logger.isEnabledFor(level):
            return
        extra = kwargs.pop("extra", {})
        for key in list(kwargs):
            if key not in {"exc_info", "stack_info", "stacklevel"}:
                extra[key] = kwargs.pop(key)
        kwargs["extra"] = extra
        self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)


def setup_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = True,
    include_location: bool = False,
    stream=None,
) -> None:
    """
    Setup structured logging on the root logger.

    Call once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Use JSON formatter (True) or standard formatter (False)
        include_location: Include filename:lineno in logs
        stream: Output stream, defaults to stderr
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if json_output:
        formatter = JSONFormatter(include_location=include_location)
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)
    """
    return StructuredLogger(logging.getLogger(name))
