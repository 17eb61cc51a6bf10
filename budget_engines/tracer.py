"""
budget_engines.tracer -- BUDGET_ENGINE_TRACE records for engine calls.

Responsibility:
    ``@traced_engine`` wraps a pure engine entry point and logs one
    BUDGET_ENGINE_TRACE record per call: engine name and version, a
    fingerprint of the keyword inputs the engine names, the outcome, and
    the elapsed time.  The fingerprint identifies the slot (or shift, or
    ceiling) being priced, not the full pricing context: ``roster``,
    ``assumptions`` and ``rate_table`` are not part of it, so calls under
    different rates can share a fingerprint.

Architecture position:
    Engines -- support code for the pure calculators.  Emits log records
    only; inputs and results pass through untouched.

Invariants enforced:
    - Fingerprints reuse the kernel's canonical hashing, so mapping order
      and trailing zeros on amounts never change them.  Frozen dataclasses
      (TimeSlot, ShiftDay, RateAssumptions) are fingerprinted field by field.
    - Nothing is fingerprinted or logged while INFO is disabled for the
      tracer logger.

Failure modes:
    - An exception from the engine is logged with ``outcome="error"`` and
      re-raised unchanged.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import time
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from budget_kernel.logging_config import get_logger
from budget_kernel.utils.hashing import hash_payload

_logger = get_logger("engines.tracer")

FINGERPRINT_LENGTH = 16


def _fingerprint_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _fingerprint_value(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(k): _fingerprint_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [_fingerprint_value(v) for v in value]
        return sorted(items, key=repr) if isinstance(value, (set, frozenset)) else items
    if value is None or isinstance(value, (str, int, float, Decimal, date, UUID)):
        return value
    return repr(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    kwargs: Mapping[str, Any],
) -> str:
    """Truncated SHA-256 over the named keyword arguments (missing ones count as None)."""
    selected = {name: _fingerprint_value(kwargs.get(name)) for name in fingerprint_fields}
    return hash_payload(selected)[:FINGERPRINT_LENGTH]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorate an engine entry point.

    Args:
        engine_name: Stable engine identifier, e.g. "slot_cost".
        engine_version: Bumped whenever the pricing rules change.
        fingerprint_fields: Keyword arguments hashed into the fingerprint;
            any other keyword argument is left out.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _logger.isEnabledFor(logging.INFO):
                return func(*args, **kwargs)

            fingerprint = (
                compute_input_fingerprint(fingerprint_fields, kwargs)
                if fingerprint_fields
                else ""
            )
            outcome = "ok"
            started = time.monotonic()
            try:
                return func(*args, **kwargs)
            except Exception:
                outcome = "error"
                raise
            finally:
                _logger.info("BUDGET_ENGINE_TRACE", extra={
                    "trace_type": "BUDGET_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "function": func.__qualname__,
                    "input_fingerprint": fingerprint,
                    "outcome": outcome,
                    "duration_ms": round((time.monotonic() - started) * 1000, 2),
                })

        return wrapper

    return decorator
