"""Source adapters for roster/shift ingestion (file I/O only)."""

from budget_ingestion.adapters.base import ReadOptions, SourceAdapter, SourceProbe
from budget_ingestion.adapters.json_adapter import JsonSourceAdapter

__all__ = [
    "SourceAdapter",
    "SourceProbe",
    "ReadOptions",
    "JsonSourceAdapter",
]
