"""Logging for sqlscript.

All loggers live under the ``sqlscript`` namespace. Events are short dotted
names (``splitter.statement.found``) with their data passed as structured
fields. Records logged inside :func:`script_context` also carry the script
being processed (its file and dialect), so output from several scripts parsed
in one run can be told apart.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from sqlscript._serialization import encode_json

if TYPE_CHECKING:
    from collections.abc import Generator
    from logging import LogRecord

__all__ = (
    "ScriptContextFilter",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "get_script_context",
    "log_with_context",
    "script_context",
)

script_context_var: ContextVar[dict[str, Any] | None] = ContextVar("script_context", default=None)

_ROOT_LOGGER_NAME = "sqlscript"
_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@contextmanager
def script_context(**fields: Any) -> Generator[None, None, None]:
    """Attach fields to every sqlscript record logged inside the block.

    Nested blocks add to the outer fields; inner values win.

    Args:
        **fields: Fields describing the script, such as ``script`` or ``dialect``.

    Yields:
        None
    """
    token = script_context_var.set({**get_script_context(), **fields})
    try:
        yield
    finally:
        script_context_var.reset(token)


def get_script_context() -> dict[str, Any]:
    """Get a copy of the fields bound by the enclosing :func:`script_context` blocks."""
    return dict(script_context_var.get() or {})


class ScriptContextFilter(logging.Filter):
    """Copy the active script context onto each record as ``script_context``."""

    def filter(self, record: LogRecord) -> bool:
        context = get_script_context()
        if context:
            record.script_context = context  # type: ignore[attr-defined]
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter merging the script context and the event fields."""

    def format(self, record: LogRecord) -> str:
        """Format a record as one JSON object.

        Args:
            record: The log record to format

        Returns:
            JSON formatted log entry
        """
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        log_entry.update(getattr(record, "script_context", {}))
        log_entry.update(getattr(record, "extra_fields", {}))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return encode_json(log_entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger in the ``sqlscript`` namespace.

    Args:
        name: Logger name, prefixed with ``sqlscript.`` unless it already is.
            If not provided, returns the root sqlscript logger.

    Returns:
        Logger with the script context filter installed.
    """
    if name is None:
        return logging.getLogger(_ROOT_LOGGER_NAME)

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)

    if not any(isinstance(f, ScriptContextFilter) for f in logger.filters):
        logger.addFilter(ScriptContextFilter())

    return logger


def configure_logging(
    level: str = "INFO", format_style: str = "structured", extra_handlers: list[logging.Handler] | None = None
) -> None:
    """Send sqlscript events to stdout.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: "structured" for one JSON object per event, "simple" for text
        extra_handlers: Additional handlers to add
    """
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    formatter: logging.Formatter = (
        StructuredFormatter() if format_style == "structured" else logging.Formatter(_TEXT_FORMAT)
    )
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for handler in extra_handlers or ():
        root_logger.addHandler(handler)

    root_logger.propagate = False


def log_with_context(logger: logging.Logger, level: int, event: str, **extra_fields: Any) -> None:
    """Log an event with structured fields.

    Args:
        logger: The logger to use
        level: Log level
        event: Dotted event name
        **extra_fields: Event data, written out by :class:`StructuredFormatter`
    """
    if not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(logger.name, level, "(unknown file)", 0, event, (), None)
    record.extra_fields = extra_fields  # type: ignore[attr-defined]
    logger.handle(record)
