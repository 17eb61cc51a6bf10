"""Pure record parsing for roster and shift ingestion (ZERO I/O)."""

from budget_ingestion.domain.parsers import (
    parse_clock_value,
    parse_roster,
    parse_shift_date,
    parse_shift_record,
    parse_shifts,
    parse_slot_record,
    parse_staff_record,
    validate_period,
)

__all__ = [
    "parse_clock_value",
    "parse_roster",
    "parse_shift_date",
    "parse_shift_record",
    "parse_shifts",
    "parse_slot_record",
    "parse_staff_record",
    "validate_period",
]
