"""Log formatters: one JSON object per line, or columns for a terminal.

Both formatters merge in the correlation id and the fields bound through
``flood_mission_planner.logging.context``, followed by any ``extra``
fields passed on the logging call itself.
"""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from flood_mission_planner.constants import SERVICE_NAME
from flood_mission_planner.logging.context import get_correlation_id, get_extra_context

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRIBUTES: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)),
) | {"message", "asctime"}

_LOGGER_NAME_WIDTH = 30


def _collect_context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Bound context fields updated with the record's ``extra`` fields."""
    fields = get_extra_context()
    for key, value in vars(record).items():
        if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
            fields[key] = value
    return fields


def _describe_exception(record: logging.LogRecord) -> dict[str, Any] | None:
    if not record.exc_info:
        return None
    exc_type, exc_value, _ = record.exc_info
    return {
        "type": exc_type.__name__ if exc_type else "Unknown",
        "message": str(exc_value) if exc_value else "",
        "traceback": traceback.format_exception(*record.exc_info),
    }


class JSONFormatter(logging.Formatter):
    """Structured output for log aggregation."""

    def __init__(
        self,
        *,
        service_name: str = SERVICE_NAME,
        service_version: str | None = None,
        include_timestamp: bool = True,
        include_location: bool = True,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._service_version = service_version
        self._include_timestamp = include_timestamp
        self._include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {}
        if self._include_timestamp:
            entry["timestamp"] = datetime.fromtimestamp(record.created, UTC).isoformat(
                timespec="milliseconds",
            )
        entry.update(
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )

        correlation = get_correlation_id()
        if correlation:
            entry["correlation_id"] = correlation

        entry["service"] = self._service_name
        if self._service_version:
            entry["version"] = self._service_version

        if self._include_location:
            entry.update(module=record.module, function=record.funcName, line=record.lineno)

        entry.update(_collect_context_fields(record))

        exception = _describe_exception(record)
        if exception is not None:
            entry["exception"] = exception

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """``time | LEVEL | logger | message | key=value ...`` for local runs."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _format_level(self, level: str) -> str:
        padded = f"{level:<8}"
        if not self._use_colors:
            return padded
        return f"{self.COLORS.get(level, '')}{padded}{self.RESET}"

    @staticmethod
    def _format_logger_name(name: str) -> str:
        if len(name) > _LOGGER_NAME_WIDTH:
            name = "..." + name[-(_LOGGER_NAME_WIDTH - 3) :]
        return f"{name:<{_LOGGER_NAME_WIDTH}}"

    def format(self, record: logging.LogRecord) -> str:
        columns = [
            datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
            self._format_level(record.levelname),
            self._format_logger_name(record.name),
            record.getMessage(),
        ]

        pairs = [f"{key}={value}" for key, value in _collect_context_fields(record).items()]
        correlation = get_correlation_id()
        if correlation:
            pairs.insert(0, f"correlation_id={correlation}")
        if pairs:
            columns.append(" ".join(pairs))

        line = " | ".join(columns)
        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return line
