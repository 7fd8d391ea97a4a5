from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

DEFAULT_SERVICE = "s3check"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")

_RESERVED_RECORD_FIELDS = set(logging.makeLogRecord({}).__dict__.keys()) | {"message", "asctime"}
_SECRET_FIELD_HINTS = ("secret", "password", "token")


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _RESERVED_RECORD_FIELDS or key.startswith("_"):
            continue
        if any(hint in key.lower() for hint in _SECRET_FIELD_HINTS):
            value = "****"
        context[key] = value
    return context


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S%z")


class JsonFormatter(logging.Formatter):
    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        context = _record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_utc_timestamp()} {record.levelname} {record.name} service={self.service} message={record.getMessage()}"
        context = _record_context(record)
        if context:
            line += " " + " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def resolve_level(level: str | None = None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str | None = None,
    service: str = DEFAULT_SERVICE,
    stream: TextIO | None = None,
) -> None:
    use_json = _parse_bool(os.getenv("LOG_JSON"), default=bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME")))

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter(service=service) if use_json else TextFormatter(service=service))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(resolve_level(level))
    # RegionParseWarning and friends become WARNING log lines on py.warnings.
    logging.captureWarnings(True)
    # botocore is chatty at DEBUG; keep it one notch quieter than ours.
    logging.getLogger("botocore").setLevel(max(root_logger.level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def with_context(logger: logging.Logger, **context: Any) -> logging.LoggerAdapter:
    return logging.LoggerAdapter(logger, extra=context)
