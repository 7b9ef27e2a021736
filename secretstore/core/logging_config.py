"""
Logging setup for SecretStore.

Store operations log the secret path and the version numbers they touched,
passed as ``extra`` fields (``secret_path``, ``versions``). The JSON
formatter emits those fields as keys of their own; the text formatter
appends them to the line. Secret values are never logged, and a redaction
filter scrubs anything that looks like a credential before it reaches a
handler.
"""

import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

REDACTED = "***REDACTED***"

# Record attributes set by store operations through ``extra=``
STORE_FIELDS = ("secret_path", "versions")

_SIZE_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*([KMG]?B)?\s*$', re.IGNORECASE)
_SIZE_UNITS = {None: 1, 'B': 1, 'KB': 1024, 'MB': 1024 ** 2, 'GB': 1024 ** 3}


class SensitiveDataFilter(logging.Filter):
    """Redact credential-looking values from log messages."""

    _KEYS = r'(?:password|passwd|secret|token|api[_-]?key)'

    PATTERNS = [
        re.compile(r'(Authorization:\s+)(?:Bearer\s+)?\S+', re.IGNORECASE),
        re.compile(r'(' + _KEYS + r'["\']?\s*[:=]\s*["\']?)[^\s"\',}]+', re.IGNORECASE),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True

        # %-style args are merged into the message so they get scrubbed too
        message = record.getMessage() if record.args else record.msg
        for pattern in self.PATTERNS:
            message = pattern.sub(r'\1' + REDACTED, message)
        record.msg, record.args = message, ()
        return True


def _store_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {name: getattr(record, name) for name in STORE_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with store fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_store_fields(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text output, e.g. ``... [DEBUG] secretstore.kv.store: Stored version 2 (secret_path=app/db)``."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _store_fields(record)
        if fields:
            line += " (" + ", ".join(f"{k}={v}" for k, v in fields.items()) + ")"
        return line


FORMATTERS = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: Optional[str] = None,
    rotation_size: str = "10MB",
    rotation_count: int = 5,
    module_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configure the root logger for SecretStore.

    Replaces any handlers already on the root logger with a stdout handler
    and, when log_file is given, a size-rotated file handler. Every handler
    carries the redaction filter.

    Args:
        level: Root log level name, case-insensitive
        format_type: "json" or "text"
        log_file: Optional path of a log file; parent directories are created
        rotation_size: File size that triggers rotation (e.g. "10MB")
        rotation_count: Rotated files to keep
        module_levels: Per-logger level overrides,
                      e.g. {"secretstore.kv.store": "DEBUG"}

    Raises:
        ValueError: If format_type or rotation_size is not recognised
    """
    formatter_cls = FORMATTERS.get(format_type)
    if formatter_cls is None:
        raise ValueError(f"Unknown log format: {format_type}")
    formatter = formatter_cls()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=_parse_size(rotation_size),
            backupCount=rotation_count,
            encoding='utf-8'
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(handler)

    for module_name, module_level in (module_levels or {}).items():
        logging.getLogger(module_name).setLevel(module_level.upper())

    root_logger.debug(
        f"Logging configured: level={level}, format={format_type}, file={log_file or '-'}"
    )


def _parse_size(size_str: str) -> int:
    """
    Convert a size such as "512", "64KB" or "1.5MB" to bytes.

    Raises:
        ValueError: If the string is not a number with an optional B/KB/MB/GB unit
    """
    match = _SIZE_RE.match(size_str)
    if match is None:
        raise ValueError(f"Invalid size: {size_str!r}")

    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit.upper() if unit else None])
