"""
JSON roster/shift reader.

Two layouts are supported:

* ``array`` -- one JSON document whose records sit in a list, either at the
  top level or under a dotted ``json_path`` ("data.shifts", "0.staff").
* ``jsonl`` -- one JSON object per line; blank lines are ignored.

``auto`` (the default) picks ``jsonl`` for ``.jsonl`` / ``.ndjson`` files and
``array`` for anything else.  Items that are not JSON objects are skipped.

Record keys are normalized (lower-cased, ``_`` and ``-`` removed), so
exports spelling ``staffId``, ``staff_id`` or ``STAFF-ID`` all reach the
parsers as ``staffid``.
"""

from __future__ import annotations

import json
from itertools import islice
from pathlib import Path
from typing import Any, Iterator

from budget_ingestion.adapters.base import ReadOptions, SourceProbe

PROBE_SAMPLE_SIZE = 5
_LINE_DELIMITED_SUFFIXES = frozenset({".jsonl", ".ndjson"})


def normalize_key(key: str) -> str:
    """``staffId`` / ``staff_id`` / ``STAFF-ID`` -> ``staffid``."""
    return key.strip().lower().replace("_", "").replace("-", "")


def normalize_row_keys(item: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``item`` with normalized keys; non-string keys are dropped."""
    return {normalize_key(k): v for k, v in item.items() if isinstance(k, str)}


def resolve_format(source_path: Path, options: ReadOptions) -> str:
    """
    Effective layout for ``source_path``.

    Raises:
        ValueError: unknown ``format`` option.
    """
    fmt = options.get("format", "auto")
    if fmt == "auto":
        return "jsonl" if source_path.suffix.lower() in _LINE_DELIMITED_SUFFIXES else "array"
    if fmt not in ("array", "jsonl"):
        raise ValueError(f"unsupported JSON source format: {fmt!r}")
    return fmt


def _descend(document: Any, json_path: str | None) -> Any:
    """Follow a dotted path through objects and list indexes; None when it breaks."""
    node = document
    for step in (json_path or "").split("."):
        step = step.strip()
        if not step:
            continue
        if isinstance(node, dict):
            node = node.get(step)
        elif isinstance(node, list) and step.isdigit() and int(step) < len(node):
            node = node[int(step)]
        else:
            return None
    return node


class JsonSourceAdapter:
    """SourceAdapter for JSON documents and JSON Lines files."""

    def _raw_items(self, source_path: Path, options: ReadOptions) -> Iterator[Any]:
        encoding = options.get("encoding", "utf-8")
        with source_path.open("r", encoding=encoding) as handle:
            if resolve_format(source_path, options) == "jsonl":
                for line in handle:
                    if line.strip():
                        yield json.loads(line)
                return
            records = _descend(json.load(handle), options.get("json_path"))
        if isinstance(records, list):
            yield from records

    def read(self, source_path: Path, options: ReadOptions) -> Iterator[dict[str, Any]]:
        for item in self._raw_items(source_path, options):
            if isinstance(item, dict):
                yield normalize_row_keys(item)

    def probe(self, source_path: Path, options: ReadOptions) -> SourceProbe:
        """Count records and report the keys of the first few."""
        rows = self.read(source_path, options)
        sample = tuple(islice(rows, PROBE_SAMPLE_SIZE))
        row_count = len(sample) + sum(1 for _ in rows)
        columns = sorted({key for row in sample for key in row})
        return SourceProbe(
            row_count=row_count,
            columns=tuple(columns),
            sample_rows=sample,
            encoding=options.get("encoding", "utf-8"),
        )
