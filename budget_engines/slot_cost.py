"""
budget_engines.slot_cost -- Per-slot, per-staff labor cost breakdown.

Responsibility:
    Price one TimeSlot: for every assigned staff member compute base pay,
    overtime pay and bonuses, then total the slot.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by ``budget_engines.shift_cost``.

Invariants enforced:
    - Overtime applies when the slot exceeds 480 minutes; the first 8 hours
      are paid at the base rate, the remainder at rate x multiplier.
      A slot of exactly 480 minutes is NOT overtime.
    - Bonuses per hour: night bonus when the slot is night-flagged, plus
      weekend OR holiday bonus from the day type (mutually exclusive).
    - total = base + overtime + bonuses;  slot_total = sum of totals.
    - Money components are quantized per assignment to MONEY_PRECISION so
      downstream sums are exact and order-independent.

Failure modes:
    - None for well-typed input.  Assigned ids with no roster profile are
      skipped and contribute zero.  Reversed time ranges produce negative
      hours and negative cost; they are not rejected here.

Usage:
    from budget_engines.slot_cost import SlotCostCalculator

    calculator = SlotCostCalculator()
    slot_cost = calculator.calculate(
        slot=slot,
        roster={p.staff_id: p for p in roster},
        assumptions=RateAssumptions(),
        day_type=DayType.WEEKDAY,
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from budget_engines.calendar import is_night_shift, slot_duration_minutes
from budget_engines.rates import resolve_hourly_rate
from budget_engines.tracer import traced_engine
from budget_kernel.domain.values import (
    ZERO,
    DayType,
    RateAssumptions,
    StaffProfile,
    TimeSlot,
    quantize_money,
)
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.slot_cost")

OVERTIME_THRESHOLD_MINUTES = 480
REGULAR_HOURS_PER_SLOT = Decimal("8")
_MINUTES_PER_HOUR = Decimal("60")


@dataclass(frozen=True)
class StaffAssignmentCost:
    """Cost of one staff member working one slot. Pure output."""

    staff_id: str
    display_name: str
    hourly_rate: Decimal
    worked_minutes: int
    regular_hours: Decimal
    overtime_hours: Decimal
    base_cost: Decimal
    overtime_cost: Decimal
    bonuses: Decimal
    total_cost: Decimal

    @property
    def hours(self) -> Decimal:
        return Decimal(self.worked_minutes) / _MINUTES_PER_HOUR


@dataclass(frozen=True)
class SlotCost:
    """All assignment costs for one slot."""

    slot_id: str
    start_time: str
    end_time: str
    duration_minutes: int
    is_night_shift: bool
    is_overtime: bool
    assignments: tuple[StaffAssignmentCost, ...]
    slot_total: Decimal

    @property
    def staff_count(self) -> int:
        return len(self.assignments)


def _day_type_bonus_rate(day_type: DayType, assumptions: RateAssumptions) -> Decimal:
    if day_type == DayType.WEEKEND:
        return assumptions.weekend_bonus_per_hour
    if day_type == DayType.HOLIDAY:
        return assumptions.holiday_bonus_per_hour
    return ZERO


class SlotCostCalculator:
    """
    Pure function calculator for slot costs.

    Contract:
        No I/O, fully deterministic.  All reference data passed as
        parameters.
    Guarantees:
        - One StaffAssignmentCost per assigned id present in ``roster``,
          in assignment order.
        - ``slot_total`` equals the sum of assignment ``total_cost``.
    Non-goals:
        - Does not split a slot across midnight.
        - Does not cap hours or validate staffing levels.
    """

    def price_assignment(
        self,
        profile: StaffProfile,
        hourly_rate: Decimal,
        duration_minutes: int,
        is_night: bool,
        is_overtime: bool,
        day_type: DayType,
        assumptions: RateAssumptions,
    ) -> StaffAssignmentCost:
        """Price one staff member for one slot."""
        hours = Decimal(duration_minutes) / _MINUTES_PER_HOUR

        if is_overtime:
            overtime_hours = max(ZERO, hours - REGULAR_HOURS_PER_SLOT)
            regular_hours = hours - overtime_hours
        else:
            overtime_hours = ZERO
            regular_hours = hours

        base_cost = quantize_money(regular_hours * hourly_rate)
        overtime_cost = quantize_money(
            overtime_hours * hourly_rate * assumptions.overtime_multiplier
        )

        bonus_rate = _day_type_bonus_rate(day_type, assumptions)
        if is_night:
            bonus_rate += assumptions.night_shift_bonus_per_hour
        bonuses = quantize_money(hours * bonus_rate)

        return StaffAssignmentCost(
            staff_id=profile.staff_id,
            display_name=profile.display_name,
            hourly_rate=hourly_rate,
            worked_minutes=duration_minutes,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            base_cost=base_cost,
            overtime_cost=overtime_cost,
            bonuses=bonuses,
            total_cost=base_cost + overtime_cost + bonuses,
        )

    @traced_engine("slot_cost", "1.0", fingerprint_fields=("slot", "day_type"))
    def calculate(
        self,
        *,
        slot: TimeSlot,
        roster: Mapping[str, StaffProfile],
        assumptions: RateAssumptions,
        day_type: DayType,
        rate_table: Mapping[str, Decimal] | None = None,
    ) -> SlotCost:
        """
        Price every assigned staff member of ``slot``.

        Args:
            slot: The slot to price.
            roster: staff id -> StaffProfile.
            assumptions: Rates in force for this calculation.
            day_type: Classification of the owning shift day.
            rate_table: Pre-built staff id -> rate map; rates are resolved
                on the fly when omitted.

        Returns:
            SlotCost with per-staff breakdown and slot total.
        """
        duration = slot_duration_minutes(slot.start_time, slot.end_time)
        is_night = is_night_shift(slot.start_time, slot.end_time)
        is_overtime = duration > OVERTIME_THRESHOLD_MINUTES

        assignments: list[StaffAssignmentCost] = []
        for staff_id in slot.assigned_staff_ids:
            profile = roster.get(staff_id)
            if profile is None:
                logger.debug("slot_assignment_unknown_staff", extra={
                    "slot_id": slot.slot_id,
                    "staff_id": staff_id,
                })
                continue

            if rate_table is not None and staff_id in rate_table:
                rate = rate_table[staff_id]
            else:
                rate = resolve_hourly_rate(staff_id, profile, assumptions)

            assignments.append(self.price_assignment(
                profile=profile,
                hourly_rate=rate,
                duration_minutes=duration,
                is_night=is_night,
                is_overtime=is_overtime,
                day_type=day_type,
                assumptions=assumptions,
            ))

        slot_total = sum((a.total_cost for a in assignments), ZERO)

        logger.debug("slot_cost_calculated", extra={
            "slot_id": slot.slot_id,
            "duration_minutes": duration,
            "is_night_shift": is_night,
            "is_overtime": is_overtime,
            "staff_count": len(assignments),
            "slot_total": str(slot_total),
        })

        return SlotCost(
            slot_id=slot.slot_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
            duration_minutes=duration,
            is_night_shift=is_night,
            is_overtime=is_overtime,
            assignments=tuple(assignments),
            slot_total=slot_total,
        )
