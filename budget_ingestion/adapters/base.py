"""
Adapter contract for roster and shift sources.

An adapter turns a file into an iterator of plain dicts, one per roster
row or shift day, with keys already normalized for the parsers.  Adapters
own file handling only; what a record means is decided in
``budget_ingestion.domain.parsers``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Literal, Protocol, TypedDict, runtime_checkable

SourceFormat = Literal["auto", "array", "jsonl"]


class ReadOptions(TypedDict, total=False):
    """Per-file settings; every key is optional."""

    format: SourceFormat
    json_path: str  # dotted path to a nested array, e.g. "data.shifts"
    encoding: str


@dataclass(frozen=True)
class SourceProbe:
    """What a quick look at a source found, for previews and diagnostics."""

    row_count: int
    columns: tuple[str, ...]
    sample_rows: tuple[dict[str, Any], ...]
    encoding: str | None = None


@runtime_checkable
class SourceAdapter(Protocol):

    def read(self, source_path: Path, options: ReadOptions) -> Iterator[dict[str, Any]]:
        ...

    def probe(self, source_path: Path, options: ReadOptions) -> SourceProbe:
        ...
