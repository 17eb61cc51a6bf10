"""
budget_services.calculation_service -- Period labor-budget orchestration.

Responsibility:
    Run one budget calculation for a shop and period: resolve the rates,
    price every shift day, fold the results into per-staff totals, build
    the period summary and assemble the CalculationResult.

Architecture position:
    Services -- orchestration over engines + kernel.
    Composes the pure engines (rates, shift_cost, staff_cost, summary) and
    accepts a BudgetTemplate from budget_config.  The only impure
    dependency is the injected Clock used for ``created_at``.

Invariants enforced:
    - Phase order: (1) assumptions and rate table, (2) each shift day in
      caller order is aggregated and folded, (3) summary and result.
    - Fresh state per call: the rate table, accumulator and calculator are
      built inside ``calculate_period``; nothing is cached on the service,
      so concurrent calls never share mutable state.
    - Determinism: identical inputs and clock produce identical results;
      ``calculation_id`` depends only on shop id and period bounds.
    - An explicit ``budget_ceiling`` argument wins over the template's.

Failure modes:
    - None on well-typed input.  Unknown staff and reversed slots are
      absorbed by the engines; the period bounds only label and identify
      the result, so a reversed period is still calculated.  Callers that
      take periods from users validate them first
      (``budget_ingestion.domain.validate_period``).

Usage:
    service = BudgetCalculationService(clock=DeterministicClock())
    result = service.calculate_period(
        shop_id="shop-1",
        period_start=date(2024, 1, 1),
        period_end=date(2024, 1, 31),
        roster=roster,
        shifts=shifts,
    )
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from budget_config.schema import BudgetTemplate
from budget_engines.calendar import DEFAULT_HOLIDAYS
from budget_engines.rates import build_rate_table
from budget_engines.shift_cost import ShiftCost, calculate_shift_cost
from budget_engines.slot_cost import SlotCostCalculator
from budget_engines.staff_cost import StaffCostAccumulator
from budget_engines.summary import build_period_summary
from budget_kernel.domain.clock import Clock, SystemClock
from budget_kernel.domain.values import RateAssumptions, ShiftDay, StaffProfile, to_decimal
from budget_kernel.logging_config import LogContext, get_logger
from budget_services._calculation_types import (
    CalculationResult,
    calculation_id_for,
    default_period_label,
)

logger = get_logger("services.calculation")


class BudgetCalculationService:
    """
    Orchestrates one labor-budget calculation per call.

    Contract:
        Stateless apart from the injected clock.  Safe to share between
        threads.
    Guarantees:
        - Empty ``shifts`` yields a valid all-zero result.
        - ``result.summary.total_cost`` equals the sum of staff totals.
    Non-goals:
        - Does not persist results or read input files.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def calculate_period(
        self,
        *,
        shop_id: str,
        period_start: date,
        period_end: date,
        roster: Sequence[StaffProfile],
        shifts: Sequence[ShiftDay],
        assumptions: RateAssumptions | BudgetTemplate | None = None,
        budget_ceiling: Decimal | int | str | None = None,
        created_by: str = "system",
        period_label: str | None = None,
    ) -> CalculationResult:
        """
        Calculate the labor budget of one shop over one period.

        Args:
            shop_id: Shop the period belongs to.
            period_start: First day of the period.
            period_end: Last day of the period (inclusive).
            roster: Staff profiles available for assignment.
            shifts: Shift days to price, in the order they are processed.
            assumptions: RateAssumptions, a BudgetTemplate (rates, holidays
                and default ceiling), or None for the defaults.
            budget_ceiling: Budget limit for variance reporting; overrides
                the template's ceiling when given.
            created_by: Actor recorded on the result.
            period_label: Display label; defaults to the start month label.

        Returns:
            CalculationResult.
        """
        # Phase 1: assumptions and rate table
        holidays = DEFAULT_HOLIDAYS
        ceiling = to_decimal(budget_ceiling) if budget_ceiling is not None else None
        if isinstance(assumptions, BudgetTemplate):
            holidays = assumptions.holidays
            if ceiling is None:
                ceiling = assumptions.budget_ceiling
            rates = assumptions.assumptions
        else:
            rates = assumptions or RateAssumptions.with_defaults()

        calculation_id = calculation_id_for(shop_id, period_start, period_end)

        with LogContext.bind(
            shop_id=shop_id,
            calculation_id=str(calculation_id),
            actor_id=created_by,
        ):
            t0 = time.monotonic()
            logger.info("budget_calculation_started", extra={
                "period_start": period_start.isoformat(),
                "period_end": period_end.isoformat(),
                "staff_count": len(roster),
                "shift_count": len(shifts),
            })

            roster_by_id = {profile.staff_id: profile for profile in roster}
            rate_table = build_rate_table(roster, rates)

            # Phase 2: price each shift day and fold it into staff totals
            calculator = SlotCostCalculator()
            accumulator = StaffCostAccumulator(rates)
            shift_costs: list[ShiftCost] = []
            for shift in shifts:
                shift_cost = calculate_shift_cost(
                    shift=shift,
                    roster=roster_by_id,
                    assumptions=rates,
                    rate_table=rate_table,
                    holidays=holidays,
                    calculator=calculator,
                )
                accumulator.fold(shift_cost)
                shift_costs.append(shift_cost)

            # Phase 3: summary and result
            staff_costs = accumulator.totals()
            summary = build_period_summary(
                shift_costs=shift_costs,
                staff_totals=staff_costs,
                budget_ceiling=ceiling,
            )

            result = CalculationResult(
                calculation_id=calculation_id,
                shop_id=shop_id,
                period_start=period_start,
                period_end=period_end,
                period_label=period_label or default_period_label(period_start),
                shift_costs=tuple(shift_costs),
                staff_costs=staff_costs,
                summary=summary,
                assumptions=rates,
                created_by=created_by,
                created_at=self._clock.now(),
            )

            logger.info("budget_calculation_completed", extra={
                "staff_count": len(staff_costs),
                "total_shifts": summary.total_shifts,
                "total_cost": str(summary.total_cost),
                "budget_status": (
                    summary.budget_status.value if summary.budget_status is not None else None
                ),
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            })

        return result
