"""
budget_engines.summary -- Period-wide aggregates and budget variance.

Responsibility:
    Reduce the costed shifts and per-staff totals of a period into one
    PeriodSummary: shift count, hours, cost components, total cost, and
    budget variance against an optional ceiling.  Also derives the budget
    utilization figures the budget screens report.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Cost and hour totals are sums over StaffCostTotal, never recomputed
      from shift records, so staff totals and period totals agree by
      construction.
    - budget_variance = ceiling - total_cost when a ceiling is supplied,
      otherwise 0.  Positive means under budget.

Failure modes:
    None.  Empty inputs produce an all-zero summary.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from budget_engines.shift_cost import ShiftCost
from budget_engines.staff_cost import StaffCostTotal
from budget_engines.tracer import traced_engine
from budget_kernel.domain.values import ZERO, quantize_money
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.summary")

_MINUTES_PER_HOUR = Decimal("60")
_HUNDRED = Decimal("100")
_PERCENT_PRECISION = Decimal("0.01")

# Utilization thresholds (percent of ceiling)
WITHIN_BUDGET_THRESHOLD = Decimal("80")
CAUTION_THRESHOLD = Decimal("100")


class BudgetStatus(str, Enum):
    """How the period's total cost sits against its ceiling."""

    WITHIN = "within"  # <= 80% used
    CAUTION = "caution"  # <= 100% used
    OVER = "over"  # ceiling exceeded


@dataclass(frozen=True)
class PeriodSummary:
    """Totals across all shift costs and staff totals of a period."""

    total_shifts: int
    total_minutes: int
    total_hours: Decimal
    total_base_cost: Decimal
    total_overtime_cost: Decimal
    total_bonus_cost: Decimal
    total_tax_and_insurance: Decimal
    total_cost: Decimal
    budget_ceiling: Decimal | None = None
    budget_variance: Decimal = ZERO

    @property
    def is_over_budget(self) -> bool:
        return self.budget_ceiling is not None and self.budget_variance < ZERO

    @property
    def budget_utilization(self) -> Decimal | None:
        """Percent of the ceiling consumed; None without a positive ceiling."""
        if self.budget_ceiling is None or self.budget_ceiling <= ZERO:
            return None
        return (self.total_cost / self.budget_ceiling * _HUNDRED).quantize(_PERCENT_PRECISION)

    @property
    def budget_status(self) -> BudgetStatus | None:
        if self.budget_ceiling is None:
            return None
        utilization = self.budget_utilization
        if utilization is None:
            return BudgetStatus.OVER if self.total_cost > ZERO else BudgetStatus.WITHIN
        if utilization <= WITHIN_BUDGET_THRESHOLD:
            return BudgetStatus.WITHIN
        if utilization <= CAUTION_THRESHOLD:
            return BudgetStatus.CAUTION
        return BudgetStatus.OVER

    @property
    def average_hourly_base_cost(self) -> Decimal:
        """Base cost per worked hour; 0 when nothing was worked."""
        if self.total_minutes == 0:
            return ZERO
        return quantize_money(self.total_base_cost / self.total_hours)

    def cost_breakdown(self) -> dict[str, Decimal]:
        """Share of each cost component in the total cost, in percent."""
        components = {
            "base": self.total_base_cost,
            "overtime": self.total_overtime_cost,
            "bonuses": self.total_bonus_cost,
            "tax_and_insurance": self.total_tax_and_insurance,
        }
        if self.total_cost == ZERO:
            return {name: ZERO for name in components}
        return {
            name: (amount / self.total_cost * _HUNDRED).quantize(_PERCENT_PRECISION)
            for name, amount in components.items()
        }


@traced_engine("period_summary", "1.0", fingerprint_fields=("budget_ceiling",))
def build_period_summary(
    *,
    shift_costs: Sequence[ShiftCost],
    staff_totals: Sequence[StaffCostTotal],
    budget_ceiling: Decimal | None = None,
) -> PeriodSummary:
    """
    Aggregate a period.

    Args:
        shift_costs: Every costed shift of the period.
        staff_totals: Final per-staff totals of the period.
        budget_ceiling: Optional budget limit for variance reporting.

    Returns:
        PeriodSummary.
    """
    total_minutes = sum(s.worked_minutes for s in staff_totals)
    total_cost = sum((s.total_cost for s in staff_totals), ZERO)
    variance = budget_ceiling - total_cost if budget_ceiling is not None else ZERO

    summary = PeriodSummary(
        total_shifts=len(shift_costs),
        total_minutes=total_minutes,
        total_hours=Decimal(total_minutes) / _MINUTES_PER_HOUR,
        total_base_cost=sum((s.base_pay for s in staff_totals), ZERO),
        total_overtime_cost=sum((s.overtime_pay for s in staff_totals), ZERO),
        total_bonus_cost=sum((s.total_bonus for s in staff_totals), ZERO),
        total_tax_and_insurance=sum((s.tax_and_insurance for s in staff_totals), ZERO),
        total_cost=total_cost,
        budget_ceiling=budget_ceiling,
        budget_variance=variance,
    )

    logger.info("period_summary_built", extra={
        "total_shifts": summary.total_shifts,
        "staff_count": len(staff_totals),
        "total_hours": str(summary.total_hours),
        "total_cost": str(summary.total_cost),
        "budget_ceiling": str(budget_ceiling) if budget_ceiling is not None else None,
        "budget_variance": str(variance),
    })

    return summary
