"""
budget_kernel.logging_config -- Structured logging for budget calculations.

Every record the kernel, engines and services emit is a single JSON line
carrying the event name as ``message``, the calculation-scoped context
(correlation id, shop, calculation id, actor) and whatever structured
``extra`` payload the call site attached.  Money arrives as Decimal and is
written as its exact string form, never as a float.

A plain-text rendering (``fmt="text"``) exists for people watching the
command line; it carries the same fields as ``key=value`` pairs.

Context fields live in one ContextVar holding an immutable mapping, so a
calculation running in a worker thread or task never sees another
calculation's shop or id.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "StructuredFormatter",
    "TextFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID

CONTEXT_FIELDS: tuple[str, ...] = (
    "correlation_id",
    "shop_id",
    "calculation_id",
    "actor_id",
)

_EMPTY: Mapping[str, str] = MappingProxyType({})
_context: ContextVar[Mapping[str, str]] = ContextVar("budget_log_context", default=_EMPTY)


class LogContext:
    """Calculation-scoped log fields, merged into every record."""

    @staticmethod
    def _merged(fields: Mapping[str, str | None]) -> Mapping[str, str]:
        current = dict(_context.get())
        for name, value in fields.items():
            if name in CONTEXT_FIELDS and value is not None:
                current[name] = str(value)
        return MappingProxyType(current)

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Update known fields; None values and unknown names are ignored."""
        _context.set(cls._merged(fields))

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_context.get())

    @classmethod
    def clear(cls) -> None:
        _context.set(_EMPTY)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore."""
        token = _context.set(cls._merged(fields))
        try:
            yield cls
        finally:
            _context.reset(token)


# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(str(v) for v in value)
    return str(value)


def _event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Context fields, then ``extra`` payload, then exception details."""
    fields: dict[str, Any] = dict(_context.get())
    for key, value in vars(record).items():
        if key not in _RECORD_ATTRS and key not in fields:
            fields[key] = value

    exc = record.exc_info[1] if record.exc_info else None
    if exc is not None:
        fields["exc_type"] = type(exc).__name__
        fields["exc_message"] = str(exc)
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # Typed budget errors keep their structured attributes.
        for name, value in vars(exc).items():
            if not name.startswith("_") and name != "code":
                fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in _event_fields(record).items():
            payload.setdefault(key, value)
        if record.exc_info and record.exc_info[1] is not None:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_plain, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """``LEVEL logger event key=value ...`` for terminal output."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname, record.name, record.getMessage()]
        for key, value in _event_fields(record).items():
            rendered = value if isinstance(value, str) else json.dumps(value, default=_plain)
            parts.append(f"{key}={rendered}")
        return " ".join(parts)


_ROOT_LOGGER = "budget_kernel"
_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": StructuredFormatter,
    "text": TextFormatter,
}

_configured = False
_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Child of the ``budget_kernel`` logger, e.g. ``get_logger("engines.rates")``."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
    fmt: str = "json",
) -> None:
    """
    Attach one handler to the ``budget_kernel`` logger.

    Only the first call has an effect until ``reset_logging()``.

    Raises:
        ValueError: ``fmt`` is neither "json" nor "text".
    """
    global _configured
    if fmt not in _FORMATTERS:
        raise ValueError(f"unknown log format {fmt!r}; expected one of {sorted(_FORMATTERS)}")
    with _lock:
        if _configured:
            return
        _configured = True

    target = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(_FORMATTERS[fmt]())

    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(level)
    root.propagate = False
    root.addHandler(target)


def reset_logging() -> None:
    """Drop handlers and return to the unconfigured state (tests only)."""
    global _configured
    with _lock:
        _configured = False
    root = logging.getLogger(_ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    root.propagate = True
