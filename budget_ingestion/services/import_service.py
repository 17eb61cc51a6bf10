"""
Import service: read roster and shift files -> validated calculation inputs.

Orchestrates the source adapters and the domain parsers.  Uses structured
logging (get_logger("ingestion.*")).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from budget_kernel.domain.values import ShiftDay, StaffProfile
from budget_kernel.logging_config import get_logger

from budget_ingestion.adapters.base import ReadOptions, SourceAdapter
from budget_ingestion.adapters.json_adapter import JsonSourceAdapter
from budget_ingestion.domain.parsers import parse_roster, parse_shifts

logger = get_logger("ingestion.import_service")


@dataclass(frozen=True)
class CalculationInputs:
    """Parsed roster and shift days, ready for BudgetCalculationService."""

    roster: tuple[StaffProfile, ...]
    shifts: tuple[ShiftDay, ...]


def _options_for(json_path: str | None) -> ReadOptions:
    options: ReadOptions = {"format": "auto"}
    if json_path:
        options["json_path"] = json_path
    return options


def load_calculation_inputs(
    roster_path: Path | str,
    shifts_path: Path | str,
    *,
    shop_id: str | None = None,
    roster_json_path: str | None = None,
    shifts_json_path: str | None = None,
    adapter: SourceAdapter | None = None,
) -> CalculationInputs:
    """
    Read and parse a roster file and a shifts file.

    ``.jsonl`` and ``.ndjson`` files are read as JSON Lines, everything
    else as a JSON array.  ``*_json_path`` selects a nested array (e.g. "data.staff").

    Raises:
        FileNotFoundError: a file does not exist.
        json.JSONDecodeError: a file is not valid JSON.
        InputError: a record fails validation.
    """
    adapter = adapter or JsonSourceAdapter()
    roster_path = Path(roster_path)
    shifts_path = Path(shifts_path)

    roster = parse_roster(adapter.read(roster_path, _options_for(roster_json_path)))
    shifts = parse_shifts(
        adapter.read(shifts_path, _options_for(shifts_json_path)),
        shop_id=shop_id,
    )

    logger.info("calculation_inputs_loaded", extra={
        "roster_file": roster_path.name,
        "shifts_file": shifts_path.name,
        "staff_count": len(roster),
        "shift_count": len(shifts),
    })
    return CalculationInputs(roster=roster, shifts=shifts)
