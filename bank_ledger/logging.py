"""Structured logging configuration for bank-ledger.

Ledger operations attach their fields as ``extra={"extra": {...}}``. Both
formatters render those fields: the JSON one merges them into the object,
the standard one appends them as ``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure logging for bank-ledger.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    stream : TextIO | None
        Destination stream. Defaults to stderr so log lines never mix with
        the menu output on stdout.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_type == "json" else KeyValueFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("bank_ledger").setLevel(log_level)
    # Faker logs locale lookups at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def _structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = getattr(record, "extra", None)
    return fields if isinstance(fields, dict) else {}


class KeyValueFormatter(logging.Formatter):
    """Pipe-separated text lines followed by the record's structured fields."""

    def __init__(self) -> None:
        super().__init__(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _structured_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        # Keep any traceback below the key=value pairs
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(_structured_fields(record))
        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (usually ``__name__``)."""
    return logging.getLogger(name)
