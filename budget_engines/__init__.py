"""
Module: budget_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    labor-cost calculation engines.  This is the canonical import surface
    for higher layers (budget_services, scripts).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import budget_kernel (domain values, logging) and sibling
    engine modules.  MUST NOT import budget_services, budget_config or
    budget_ingestion.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
    - Decimal-only arithmetic: rates, hours and amounts use ``Decimal``.
    - Determinism: identical inputs always produce identical outputs.
    - No domain errors: anomalies (unknown staff, reversed time ranges)
      are absorbed, never raised.

Usage:
    from budget_engines import SlotCostCalculator, calculate_shift_cost
    from budget_engines import StaffCostAccumulator, build_period_summary
"""

from budget_kernel.logging_config import get_logger

logger = get_logger("engines")

from budget_engines.calendar import (
    DEFAULT_HOLIDAYS,
    classify_day,
    is_night_shift,
    slot_duration_minutes,
)
from budget_engines.rates import build_rate_table, resolve_hourly_rate
from budget_engines.shift_cost import ShiftCost, calculate_shift_cost
from budget_engines.slot_cost import (
    OVERTIME_THRESHOLD_MINUTES,
    SlotCost,
    SlotCostCalculator,
    StaffAssignmentCost,
)
from budget_engines.staff_cost import StaffCostAccumulator, StaffCostTotal
from budget_engines.summary import BudgetStatus, PeriodSummary, build_period_summary

__all__ = [
    # Calendar
    "DEFAULT_HOLIDAYS",
    "classify_day",
    "is_night_shift",
    "slot_duration_minutes",
    # Rates
    "build_rate_table",
    "resolve_hourly_rate",
    # Slot
    "OVERTIME_THRESHOLD_MINUTES",
    "SlotCost",
    "SlotCostCalculator",
    "StaffAssignmentCost",
    # Shift
    "ShiftCost",
    "calculate_shift_cost",
    # Staff
    "StaffCostAccumulator",
    "StaffCostTotal",
    # Summary
    "BudgetStatus",
    "PeriodSummary",
    "build_period_summary",
]
