"""Logging configuration for dunechar.

Configurable via environment variables:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
- LOG_FORMAT: Set format ('text' or 'json'). Default: text

Check reports attach the offending member to their records
(``extra={"sub_group": ..., "entity": ...}``). Both formatters print these
fields, encoded with the safe JSON codec.

Usage:
    from dunechar.logging_config import configure_logging
    configure_logging()  # Call once at program startup
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, ClassVar

from dunechar import safe_json

LOGGER_NAMESPACE = "dunechar"

# Attributes of every LogRecord, anything else came in through "extra"
_RECORD_ATTRIBUTES: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed to a logging call through ``extra``, sorted by name."""
    return {
        key: value
        for key, value in sorted(vars(record).items())
        if key not in _RECORD_ATTRIBUTES
    }


def _shows_source(record: logging.LogRecord) -> bool:
    return record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL)


class JSONFormatter(logging.Formatter):
    """JSON log formatter producing one object per line.

    Character data may hold big integers or NaN, so the record is encoded
    with ``safe_json`` rather than ``json``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with log data.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Source location for debug and error
        if _shows_source(record):
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extras = record_extras(record)
        if extras:
            log_data["extra"] = extras

        return safe_json.dumps(log_data, indent=None, default=str)


class TextFormatter(logging.Formatter):
    """Human readable formatter.

    Format: TIMESTAMP LEVEL [LOGGER] MESSAGE key=value...
    For DEBUG/ERROR: includes file:line in source
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold red
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize formatter.

        Args:
            use_colors: Whether to use ANSI colors in output.
        """
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    @staticmethod
    def format_extra(key: str, value: Any) -> str:
        """One ``key=value`` pair, strings unquoted, other values as safe JSON."""
        if isinstance(value, str):
            return f"{key}={value}"
        return f"{key}={safe_json.dumps(value, indent=None, default=str)}"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text.

        Args:
            record: Log record to format.

        Returns:
            Formatted string.
        """
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname

        if self.use_colors:
            color = self.LEVEL_COLORS.get(level, "")
            level_str = f"{color}{level:8s}{self.RESET}"
        else:
            level_str = f"{level:8s}"

        # "dunechar.model.character" reads as "model.character"
        logger_name = record.name.removeprefix(f"{LOGGER_NAMESPACE}.")

        parts = [f"{timestamp} {level_str} [{logger_name}] {record.getMessage()}"]

        parts.extend(
            f" {self.format_extra(key, value)}" for key, value in record_extras(record).items()
        )

        if _shows_source(record):
            parts.append(f" ({record.filename}:{record.lineno})")

        if record.exc_info:
            parts.append(f"\n{self.formatException(record.exc_info)}")

        return "".join(parts)


def get_log_level() -> int:
    """Get log level from the LOG_LEVEL environment variable.

    Returns:
        Logging level constant, INFO when unset or unknown.
    """
    return _LEVELS.get(os.environ.get("LOG_LEVEL", "INFO").strip().upper(), logging.INFO)


def get_log_format() -> str:
    """Get log format from the LOG_FORMAT environment variable.

    Returns:
        Format string ('text' or 'json').
    """
    format_name = os.environ.get("LOG_FORMAT", "text").strip().lower()
    return format_name if format_name in ("text", "json") else "text"


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    use_colors: bool = True,
) -> None:
    """Configure the ``dunechar`` logger hierarchy.

    Loggers outside the namespace and the root logger are left untouched.

    Args:
        level: Log level (use logging.DEBUG, logging.INFO, etc.)
               If None, reads from LOG_LEVEL env var.
        format_type: Output format ('text' or 'json').
                     If None, reads from LOG_FORMAT env var.
        use_colors: Whether to use colors in text format (only if stderr is TTY).
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()

    handler = logging.StreamHandler(sys.stderr)
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(use_colors=use_colors))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)

    # Calling twice must not print every record twice
    namespace_logger.handlers.clear()
    namespace_logger.addHandler(handler)
    namespace_logger.propagate = False

    namespace_logger.debug(
        "Logging configured",
        extra={"level": logging.getLevelName(level), "format": format_type},
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``dunechar`` namespace.

    Modules run as scripts have ``__name__ == "__main__"``; their records
    still reach the ``dunechar`` handler.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance.
    """
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
