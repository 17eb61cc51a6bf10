"""
Content digests for templates and calculation results.

A digest must not change when nothing meaningful changed: mapping order,
trailing zeros on amounts (``1387.50`` vs ``1387.5``), tuple-vs-list and
set ordering are all erased before hashing.  Result fields that differ
between two runs over the same inputs (``created_at``) are dropped at any
depth.
"""

import hashlib
import json
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

VOLATILE_RESULT_FIELDS = frozenset({"created_at"})


def _canonical(value: Any, drop: frozenset[str]) -> Any:
    if isinstance(value, Mapping):
        return {
            str(key): _canonical(item, drop)
            for key, item in value.items()
            if str(key) not in drop
        }
    if isinstance(value, (list, tuple)):
        return [_canonical(item, drop) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(item, drop) for item in value), key=repr)
    if isinstance(value, Decimal):
        return str(value.normalize())
    if isinstance(value, date):
        # datetime included
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise TypeError(f"cannot hash value of type {type(value).__name__}")


def canonicalize_json(data: Any, drop: frozenset[str] = frozenset()) -> str:
    """Compact, key-sorted JSON text of ``data`` with ``drop`` keys removed."""
    return json.dumps(
        _canonical(data, drop),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def hash_payload(payload: Any, drop: frozenset[str] = frozenset()) -> str:
    """Hex SHA-256 of the canonical JSON form."""
    return hashlib.sha256(canonicalize_json(payload, drop).encode("utf-8")).hexdigest()


def hash_calculation_content(result_dict: Mapping[str, Any]) -> str:
    """Digest of a serialized CalculationResult, ignoring run-specific fields."""
    return hash_payload(result_dict, VOLATILE_RESULT_FIELDS)
