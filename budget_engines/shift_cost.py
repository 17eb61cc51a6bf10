"""
budget_engines.shift_cost -- Roll slot costs up into one total per shift day.

Responsibility:
    Classify the shift date once, price every slot with the
    SlotCostCalculator, and sum slot totals into the daily total.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by the calculation orchestrator; results are folded into
    ``budget_engines.staff_cost``.

Invariants enforced:
    - daily_total == sum(slot.slot_total for slot in slots).
    - Slot order is preserved.

Failure modes:
    None.  An empty slot list yields daily_total 0.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from budget_engines.calendar import DEFAULT_HOLIDAYS, classify_day
from budget_engines.slot_cost import SlotCost, SlotCostCalculator
from budget_engines.tracer import traced_engine
from budget_kernel.domain.values import (
    ZERO,
    DayType,
    RateAssumptions,
    ShiftDay,
    StaffProfile,
)
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.shift_cost")


@dataclass(frozen=True)
class ShiftCost:
    """Costed shift day: slot breakdown plus daily total."""

    shift_id: str
    shift_date: date
    day_type: DayType
    slots: tuple[SlotCost, ...]
    daily_total: Decimal

    @property
    def total_minutes(self) -> int:
        """Staff-minutes worked across all slots of the day."""
        return sum(a.worked_minutes for s in self.slots for a in s.assignments)


@traced_engine("shift_cost", "1.0", fingerprint_fields=("shift", "holidays"))
def calculate_shift_cost(
    *,
    shift: ShiftDay,
    roster: Mapping[str, StaffProfile],
    assumptions: RateAssumptions,
    rate_table: Mapping[str, Decimal] | None = None,
    holidays: Collection[tuple[int, int]] = DEFAULT_HOLIDAYS,
    calculator: SlotCostCalculator | None = None,
) -> ShiftCost:
    """
    Price one shift day.

    Args:
        shift: The shift day to price.
        roster: staff id -> StaffProfile.
        assumptions: Rates in force for this calculation.
        rate_table: Pre-built staff id -> rate map (optional).
        holidays: (month, day) pairs classified as holidays.
        calculator: Slot calculator to use (a fresh one by default).

    Returns:
        ShiftCost tagged with the day type.
    """
    calculator = calculator or SlotCostCalculator()
    day_type = classify_day(shift.shift_date, holidays)

    slot_costs = tuple(
        calculator.calculate(
            slot=slot,
            roster=roster,
            assumptions=assumptions,
            day_type=day_type,
            rate_table=rate_table,
        )
        for slot in shift.slots
    )
    daily_total = sum((s.slot_total for s in slot_costs), ZERO)

    logger.debug("shift_cost_calculated", extra={
        "shift_id": shift.shift_id,
        "shift_date": shift.shift_date.isoformat(),
        "day_type": day_type.value,
        "slot_count": len(slot_costs),
        "daily_total": str(daily_total),
    })

    return ShiftCost(
        shift_id=shift.shift_id,
        shift_date=shift.shift_date,
        day_type=day_type,
        slots=slot_costs,
        daily_total=daily_total,
    )
