"""
Tests for the period summary builder.

Covers:
- Totals as sums over staff totals
- Budget variance, utilization and status
- Cost breakdown and average hourly base cost
- Empty periods
"""

from decimal import Decimal

import pytest

from budget_engines.shift_cost import calculate_shift_cost
from budget_engines.staff_cost import StaffCostAccumulator
from budget_engines.summary import BudgetStatus, build_period_summary
from budget_kernel.domain.values import RateAssumptions


@pytest.fixture
def costed_period(weekday_shift, night_shift, roster_by_id):
    assumptions = RateAssumptions()
    acc = StaffCostAccumulator(assumptions)
    shift_costs = []
    for shift in (weekday_shift, night_shift):
        cost = calculate_shift_cost(shift=shift, roster=roster_by_id, assumptions=assumptions)
        acc.fold(cost)
        shift_costs.append(cost)
    return shift_costs, acc.totals()


class TestPeriodTotals:

    def test_totals(self, costed_period):
        shift_costs, staff_totals = costed_period
        summary = build_period_summary(shift_costs=shift_costs, staff_totals=staff_totals)

        assert summary.total_shifts == 2
        assert summary.total_minutes == 1200
        assert summary.total_hours == Decimal("20")
        assert summary.total_base_cost == Decimal("20100.00")
        assert summary.total_overtime_cost == Decimal("1250.00")
        assert summary.total_bonus_cost == Decimal("1350.00")
        assert summary.total_tax_and_insurance == Decimal("5675.00")
        assert summary.total_cost == Decimal("28375.00")

    def test_total_cost_equals_sum_of_staff_totals(self, costed_period):
        shift_costs, staff_totals = costed_period
        summary = build_period_summary(shift_costs=shift_costs, staff_totals=staff_totals)
        assert summary.total_cost == sum(t.total_cost for t in staff_totals)
        assert summary.total_cost == (
            summary.total_base_cost
            + summary.total_overtime_cost
            + summary.total_bonus_cost
            + summary.total_tax_and_insurance
        )

    def test_empty_period_is_all_zero(self):
        summary = build_period_summary(shift_costs=[], staff_totals=[])
        assert summary.total_shifts == 0
        assert summary.total_hours == Decimal("0")
        assert summary.total_cost == Decimal("0")
        assert summary.budget_variance == Decimal("0")
        assert summary.average_hourly_base_cost == Decimal("0")
        assert summary.cost_breakdown() == {
            "base": Decimal("0"),
            "overtime": Decimal("0"),
            "bonuses": Decimal("0"),
            "tax_and_insurance": Decimal("0"),
        }


class TestBudgetVariance:

    def _summary(self, costed_period, ceiling):
        shift_costs, staff_totals = costed_period
        return build_period_summary(
            shift_costs=shift_costs,
            staff_totals=staff_totals,
            budget_ceiling=ceiling,
        )

    def test_no_ceiling(self, costed_period):
        summary = self._summary(costed_period, None)
        assert summary.budget_variance == Decimal("0")
        assert summary.is_over_budget is False
        assert summary.budget_utilization is None
        assert summary.budget_status is None

    def test_within_budget(self, costed_period):
        summary = self._summary(costed_period, Decimal("40000"))
        assert summary.budget_variance == Decimal("11625.00")
        assert summary.budget_utilization == Decimal("70.94")
        assert summary.budget_status == BudgetStatus.WITHIN

    def test_caution_band(self, costed_period):
        summary = self._summary(costed_period, Decimal("30000"))
        assert summary.budget_variance == Decimal("1625.00")
        assert summary.budget_utilization == Decimal("94.58")
        assert summary.budget_status == BudgetStatus.CAUTION
        assert summary.is_over_budget is False

    def test_over_budget(self, costed_period):
        summary = self._summary(costed_period, Decimal("20000"))
        assert summary.budget_variance == Decimal("-8375.00")
        assert summary.is_over_budget is True
        assert summary.budget_status == BudgetStatus.OVER

    def test_zero_ceiling_is_a_real_ceiling(self, costed_period):
        summary = self._summary(costed_period, Decimal("0"))
        assert summary.budget_variance == Decimal("-28375.00")
        assert summary.budget_utilization is None
        assert summary.budget_status == BudgetStatus.OVER

    def test_zero_ceiling_empty_period_within(self):
        summary = build_period_summary(shift_costs=[], staff_totals=[], budget_ceiling=Decimal("0"))
        assert summary.budget_status == BudgetStatus.WITHIN


class TestBreakdown:

    def test_average_hourly_base_cost(self, costed_period):
        shift_costs, staff_totals = costed_period
        summary = build_period_summary(shift_costs=shift_costs, staff_totals=staff_totals)
        assert summary.average_hourly_base_cost == Decimal("1005.00")

    def test_cost_breakdown_percentages(self, costed_period):
        shift_costs, staff_totals = costed_period
        breakdown = build_period_summary(
            shift_costs=shift_costs, staff_totals=staff_totals
        ).cost_breakdown()
        assert breakdown["base"] == Decimal("70.84")
        assert breakdown["overtime"] == Decimal("4.41")
        assert breakdown["bonuses"] == Decimal("4.76")
        assert breakdown["tax_and_insurance"] == Decimal("20.00")
