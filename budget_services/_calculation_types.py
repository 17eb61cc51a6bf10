"""
budget_services._calculation_types -- Calculation result DTO.

Responsibility:
    Define the frozen CalculationResult returned by the calculation
    orchestrator, its JSON-ready serialization, and the deterministic
    calculation id derivation.

Architecture position:
    Services -- orchestration over engines + kernel.
    These types live in budget_services/ because they bundle engine output
    types (ShiftCost, StaffCostTotal, PeriodSummary), which the kernel may
    not import.  The dependency direction is:
        scripts -> budget_services (may import these types)
        budget_services -> budget_engines -> budget_kernel

Invariants enforced:
    - All DTOs are frozen dataclasses (immutable).
    - calculation_id is a pure function of (shop_id, period_start,
      period_end): recalculating the same shop and period yields the same
      id, so a persistence collaborator can upsert on it.
    - content_hash excludes ``created_at``; two runs over identical inputs
      hash identically.

Failure modes:
    None.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid5

from budget_engines.shift_cost import ShiftCost
from budget_engines.slot_cost import SlotCost, StaffAssignmentCost
from budget_engines.staff_cost import StaffCostTotal
from budget_engines.summary import PeriodSummary
from budget_kernel.domain.values import RateAssumptions
from budget_kernel.utils.hashing import hash_calculation_content

# Fixed namespace for calculation ids; never change it or every stored id moves.
CALCULATION_NAMESPACE = UUID("6f1c3c1e-4a0b-5d7e-9a41-2b8f0d6e7c35")


def calculation_id_for(shop_id: str, period_start: date, period_end: date) -> UUID:
    """Deterministic calculation id for a shop and period."""
    return uuid5(
        CALCULATION_NAMESPACE,
        f"{shop_id}|{period_start.isoformat()}|{period_end.isoformat()}",
    )


def default_period_label(period_start: date) -> str:
    """Month label used by the shop screens, e.g. ``2024年1月``."""
    return f"{period_start.year}年{period_start.month}月"


def _money(value: Decimal) -> str:
    return str(value)


def _assignment_to_dict(a: StaffAssignmentCost) -> dict[str, Any]:
    return {
        "staff_id": a.staff_id,
        "display_name": a.display_name,
        "hourly_rate": _money(a.hourly_rate),
        "worked_minutes": a.worked_minutes,
        "hours": str(a.hours),
        "regular_hours": str(a.regular_hours),
        "overtime_hours": str(a.overtime_hours),
        "base_cost": _money(a.base_cost),
        "overtime_cost": _money(a.overtime_cost),
        "bonuses": _money(a.bonuses),
        "total_cost": _money(a.total_cost),
    }


def _slot_to_dict(s: SlotCost) -> dict[str, Any]:
    return {
        "slot_id": s.slot_id,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "duration_minutes": s.duration_minutes,
        "is_night_shift": s.is_night_shift,
        "is_overtime": s.is_overtime,
        "assignments": [_assignment_to_dict(a) for a in s.assignments],
        "slot_total": _money(s.slot_total),
    }


def _shift_to_dict(sc: ShiftCost) -> dict[str, Any]:
    return {
        "shift_id": sc.shift_id,
        "shift_date": sc.shift_date.isoformat(),
        "day_type": sc.day_type.value,
        "slots": [_slot_to_dict(s) for s in sc.slots],
        "daily_total": _money(sc.daily_total),
    }


def _staff_to_dict(t: StaffCostTotal) -> dict[str, Any]:
    return {
        "staff_id": t.staff_id,
        "display_name": t.display_name,
        "worked_minutes": t.worked_minutes,
        "total_hours": str(t.total_hours),
        "base_pay": _money(t.base_pay),
        "overtime_pay": _money(t.overtime_pay),
        "night_shift_bonus": _money(t.night_shift_bonus),
        "holiday_bonus": _money(t.holiday_bonus),
        "gross_pay": _money(t.gross_pay),
        "social_insurance": _money(t.social_insurance),
        "tax": _money(t.tax),
        "total_cost": _money(t.total_cost),
    }


def _summary_to_dict(s: PeriodSummary) -> dict[str, Any]:
    status = s.budget_status
    utilization = s.budget_utilization
    return {
        "total_shifts": s.total_shifts,
        "total_minutes": s.total_minutes,
        "total_hours": str(s.total_hours),
        "total_base_cost": _money(s.total_base_cost),
        "total_overtime_cost": _money(s.total_overtime_cost),
        "total_bonus_cost": _money(s.total_bonus_cost),
        "total_tax_and_insurance": _money(s.total_tax_and_insurance),
        "total_cost": _money(s.total_cost),
        "budget_ceiling": _money(s.budget_ceiling) if s.budget_ceiling is not None else None,
        "budget_variance": _money(s.budget_variance),
        "budget_utilization": str(utilization) if utilization is not None else None,
        "budget_status": status.value if status is not None else None,
        "average_hourly_base_cost": _money(s.average_hourly_base_cost),
        "cost_breakdown": {k: str(v) for k, v in s.cost_breakdown().items()},
    }


@dataclass(frozen=True)
class CalculationResult:
    """Everything one budget calculation produced."""

    calculation_id: UUID
    shop_id: str
    period_start: date
    period_end: date
    period_label: str
    shift_costs: tuple[ShiftCost, ...]
    staff_costs: tuple[StaffCostTotal, ...]
    summary: PeriodSummary
    assumptions: RateAssumptions
    created_by: str
    created_at: datetime

    @property
    def total_cost(self) -> Decimal:
        return self.summary.total_cost

    def staff_cost(self, staff_id: str) -> StaffCostTotal | None:
        for total in self.staff_costs:
            if total.staff_id == staff_id:
                return total
        return None

    def top_staff_by_cost(self, limit: int = 5) -> tuple[StaffCostTotal, ...]:
        """Highest-cost staff first; ties broken by staff id."""
        ranked = sorted(self.staff_costs, key=lambda t: (-t.total_cost, t.staff_id))
        return tuple(ranked[:max(limit, 0)])

    def top_days_by_cost(self, limit: int = 7) -> tuple[ShiftCost, ...]:
        """Costliest shift days first; ties broken by date."""
        ranked = sorted(self.shift_costs, key=lambda sc: (-sc.daily_total, sc.shift_date))
        return tuple(ranked[:max(limit, 0)])

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; Decimals rendered as strings."""
        return {
            "calculation_id": str(self.calculation_id),
            "shop_id": self.shop_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "period_label": self.period_label,
            "shift_costs": [_shift_to_dict(sc) for sc in self.shift_costs],
            "staff_costs": [_staff_to_dict(t) for t in self.staff_costs],
            "summary": _summary_to_dict(self.summary),
            "assumptions": self.assumptions.to_dict(),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }

    @property
    def content_hash(self) -> str:
        """SHA-256 of the serialized result, ignoring ``created_at``."""
        return hash_calculation_content(self.to_dict())
