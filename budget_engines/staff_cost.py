"""
budget_engines.staff_cost -- Period-wide running cost total per staff member.

Responsibility:
    Cross-cut every costed shift in a period and accumulate one
    StaffCostTotal per staff id: worked time, base pay, overtime pay,
    night-shift and holiday bonus buckets, gross pay, social insurance,
    tax and total employer cost.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    One accumulator instance per calculation; it is never shared.

Invariants enforced:
    - Two-bucket bonus classification: an assignment's bonuses go to
      ``night_shift_bonus`` when its slot is night-flagged, otherwise to
      ``holiday_bonus``.  Weekend bonuses therefore land in the holiday
      bucket for non-night slots.
    - Derived fields are recomputed from the base quantities on every fold
      (never incremented), so:
        gross_pay  == base_pay + overtime_pay + night_shift_bonus + holiday_bonus
        total_cost == gross_pay + social_insurance + tax
    - Fold order does not affect the final totals: base quantities are
      exact Decimal/int sums and derived fields depend only on them.

Failure modes:
    None.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from budget_engines.shift_cost import ShiftCost
from budget_engines.slot_cost import SlotCost, StaffAssignmentCost
from budget_kernel.domain.values import ZERO, RateAssumptions, quantize_money
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.staff_cost")

_MINUTES_PER_HOUR = Decimal("60")


@dataclass(frozen=True)
class StaffCostTotal:
    """
    Aggregate cost of one staff member over the period.

    Build through ``from_components`` so derived fields are always
    consistent with the base quantities.
    """

    staff_id: str
    display_name: str
    worked_minutes: int
    total_hours: Decimal
    base_pay: Decimal
    overtime_pay: Decimal
    night_shift_bonus: Decimal
    holiday_bonus: Decimal
    gross_pay: Decimal
    social_insurance: Decimal
    tax: Decimal
    total_cost: Decimal

    @classmethod
    def from_components(
        cls,
        *,
        staff_id: str,
        display_name: str,
        worked_minutes: int,
        base_pay: Decimal,
        overtime_pay: Decimal,
        night_shift_bonus: Decimal,
        holiday_bonus: Decimal,
        assumptions: RateAssumptions,
    ) -> StaffCostTotal:
        """Derive hours, gross pay, deductions and total from base quantities."""
        gross_pay = base_pay + overtime_pay + night_shift_bonus + holiday_bonus
        social_insurance = quantize_money(gross_pay * assumptions.social_insurance_rate)
        tax = quantize_money(gross_pay * assumptions.tax_rate)
        return cls(
            staff_id=staff_id,
            display_name=display_name,
            worked_minutes=worked_minutes,
            total_hours=Decimal(worked_minutes) / _MINUTES_PER_HOUR,
            base_pay=base_pay,
            overtime_pay=overtime_pay,
            night_shift_bonus=night_shift_bonus,
            holiday_bonus=holiday_bonus,
            gross_pay=gross_pay,
            social_insurance=social_insurance,
            tax=tax,
            total_cost=gross_pay + social_insurance + tax,
        )

    @property
    def total_bonus(self) -> Decimal:
        return self.night_shift_bonus + self.holiday_bonus

    @property
    def tax_and_insurance(self) -> Decimal:
        return self.social_insurance + self.tax


class StaffCostAccumulator:
    """
    Folds ShiftCost results into per-staff running totals.

    Contract:
        Created per calculation with that calculation's RateAssumptions.
        ``fold`` may be called in any shift order; ``totals`` returns the
        same values regardless of that order.
    Guarantees:
        - One StaffCostTotal per staff id that appears in any assignment.
        - ``totals()`` is sorted by staff id.
    Non-goals:
        - Does not separate weekend from holiday bonuses.
    """

    def __init__(self, assumptions: RateAssumptions) -> None:
        self._assumptions = assumptions
        self._totals: dict[str, StaffCostTotal] = {}

    def __len__(self) -> int:
        return len(self._totals)

    def fold_assignment(self, slot: SlotCost, assignment: StaffAssignmentCost) -> StaffCostTotal:
        """Add one assignment to its staff member's total and return the new total."""
        night_bonus = assignment.bonuses if slot.is_night_shift else ZERO
        holiday_bonus = ZERO if slot.is_night_shift else assignment.bonuses

        existing = self._totals.get(assignment.staff_id)
        if existing is None:
            updated = StaffCostTotal.from_components(
                staff_id=assignment.staff_id,
                display_name=assignment.display_name,
                worked_minutes=assignment.worked_minutes,
                base_pay=assignment.base_cost,
                overtime_pay=assignment.overtime_cost,
                night_shift_bonus=night_bonus,
                holiday_bonus=holiday_bonus,
                assumptions=self._assumptions,
            )
        else:
            updated = StaffCostTotal.from_components(
                staff_id=existing.staff_id,
                display_name=existing.display_name,
                worked_minutes=existing.worked_minutes + assignment.worked_minutes,
                base_pay=existing.base_pay + assignment.base_cost,
                overtime_pay=existing.overtime_pay + assignment.overtime_cost,
                night_shift_bonus=existing.night_shift_bonus + night_bonus,
                holiday_bonus=existing.holiday_bonus + holiday_bonus,
                assumptions=self._assumptions,
            )
        self._totals[assignment.staff_id] = updated
        return updated

    def fold(self, shift_cost: ShiftCost) -> None:
        """Fold every assignment of every slot of ``shift_cost``."""
        folded = 0
        for slot in shift_cost.slots:
            for assignment in slot.assignments:
                self.fold_assignment(slot, assignment)
                folded += 1

        logger.debug("staff_costs_folded", extra={
            "shift_id": shift_cost.shift_id,
            "assignments_folded": folded,
            "staff_count": len(self._totals),
        })

    def get(self, staff_id: str) -> StaffCostTotal | None:
        return self._totals.get(staff_id)

    def totals(self) -> tuple[StaffCostTotal, ...]:
        """Current totals, sorted by staff id."""
        return tuple(self._totals[sid] for sid in sorted(self._totals))
