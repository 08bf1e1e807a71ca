"""Logging configuration for OCR-REDACT.

Structured JSON logging with request_id correlation. Log records never carry
the raw text of a sensitive phrase: any ``phrase`` or ``word`` extra is
masked before it is formatted.
"""

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any, Optional, TextIO

from pythonjsonlogger import jsonlogger


request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Extra fields that may hold sensitive text
SENSITIVE_FIELDS = ("phrase", "word")


def mask_text(text: str, visible: int = 1) -> str:
    """Mask all but the first and last ``visible`` characters.

    Examples:
        >>> mask_text("AF12HPV")
        'A*****V'
        >>> mask_text("AB")
        '**'
    """
    if not text:
        return ""
    if len(text) <= visible * 2:
        return "*" * len(text)
    return text[:visible] + "*" * (len(text) - visible * 2) + text[-visible:]


class RequestContextFilter(logging.Filter):
    """Filter that adds request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class SensitiveFieldFilter(logging.Filter):
    """Filter that masks sensitive extras such as ``phrase``."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in SENSITIVE_FIELDS:
            value = getattr(record, name, None)
            if isinstance(value, str):
                setattr(record, name, mask_text(value))
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with service and correlation fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "asctime" in log_record:
            log_record["timestamp"] = log_record.pop("asctime")

        log_record["service"] = "ocr-redact"

        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var
               OCR_REDACT_LOG_LEVEL or INFO.
        json_format: Whether to use JSON format. Defaults to env var
                     OCR_REDACT_LOG_FORMAT == 'json' or True.
        stream: Output stream, stdout by default.
    """
    if level is None:
        level = os.getenv("OCR_REDACT_LOG_LEVEL", "INFO").upper()
    if json_format is None:
        json_format = os.getenv("OCR_REDACT_LOG_FORMAT", "json").lower() == "json"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.addFilter(SensitiveFieldFilter())

    if json_format:
        formatter = CustomJsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (typically __name__)."""
    return logging.getLogger(name)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_request_id() -> str:
    return request_id_var.get()
