#!/usr/bin/env python3
"""
Calculate a shop's labor budget for one period from roster and shift files.

Reads a roster (JSON array / JSON Lines of staff records) and a shift
schedule (shift days with time slots), prices every slot, and prints the
period summary with the per-staff breakdown -- or the full result as JSON.

Rates come from a YAML budget template (default: the bundled "standard"
template).  --budget overrides the template's budget ceiling; without it
the template's ceiling applies (1,000,000 for the bundled template).

Usage:
    python3 scripts/run_budget.py --roster <path> --shifts <path> \\
        --period-start YYYY-MM-DD --period-end YYYY-MM-DD [options]

Examples:
    # Summary table with the bundled standard rates
    python3 scripts/run_budget.py --roster staff.json --shifts shifts.json \\
        --period-start 2024-01-01 --period-end 2024-01-31

    # Custom template and budget, machine-readable output
    python3 scripts/run_budget.py --roster staff.json --shifts shifts.json \\
        --period-start 2024-01-01 --period-end 2024-01-31 \\
        --template my_shop.yaml --budget 500000 --json

Exit codes:
    0  success
    2  invalid arguments, input files or template
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def _amount(value: str) -> Decimal:
    from budget_kernel.domain.values import to_decimal

    try:
        amount = to_decimal(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if amount < 0:
        raise argparse.ArgumentTypeError(f"budget cannot be negative: {value!r}")
    return amount


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calculate a shop labor budget: roster + shifts -> cost breakdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--roster", required=True, type=Path, help="Roster file (JSON / JSONL).")
    parser.add_argument("--shifts", required=True, type=Path, help="Shift schedule file (JSON / JSONL).")
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Budget template YAML (default: bundled 'standard' template).",
    )
    parser.add_argument("--shop-id", default="default", help="Shop identifier (default: default).")
    parser.add_argument("--period-start", required=True, type=_iso_date, help="First day (YYYY-MM-DD).")
    parser.add_argument("--period-end", required=True, type=_iso_date, help="Last day (YYYY-MM-DD).")
    parser.add_argument(
        "--budget",
        type=_amount,
        default=None,
        help=(
            "Budget ceiling; overrides the template's ceiling.  Without it the"
            " template's own ceiling applies (bundled 'standard': 1,000,000)."
        ),
    )
    parser.add_argument("--created-by", default="cli", help="Actor recorded on the result.")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Structured log level on stderr (default: WARNING).",
    )
    parser.add_argument(
        "--log-format",
        default="json",
        choices=["json", "text"],
        help="Log line format on stderr (default: json).",
    )
    return parser


def _print_summary(result, out) -> None:
    summary = result.summary
    print(f"Budget {result.period_label}  shop={result.shop_id}", file=out)
    print(f"Period: {result.period_start} .. {result.period_end}", file=out)
    print(f"Calculation: {result.calculation_id}", file=out)
    print("", file=out)
    print(f"  Shifts:             {summary.total_shifts}", file=out)
    print(f"  Hours:              {summary.total_hours:.2f}", file=out)
    print(f"  Base cost:          {summary.total_base_cost:>14,.2f}", file=out)
    print(f"  Overtime cost:      {summary.total_overtime_cost:>14,.2f}", file=out)
    print(f"  Bonuses:            {summary.total_bonus_cost:>14,.2f}", file=out)
    print(f"  Tax + insurance:    {summary.total_tax_and_insurance:>14,.2f}", file=out)
    print(f"  Total cost:         {summary.total_cost:>14,.2f}", file=out)
    if summary.budget_ceiling is not None:
        print(f"  Budget ceiling:     {summary.budget_ceiling:>14,.2f}", file=out)
        print(f"  Variance:           {summary.budget_variance:>14,.2f}", file=out)
        utilization = summary.budget_utilization
        if utilization is not None:
            print(f"  Utilization:        {utilization}%  ({summary.budget_status.value})", file=out)
        else:
            print(f"  Status:             {summary.budget_status.value}", file=out)

    if result.staff_costs:
        print("", file=out)
        print(f"  {'Staff':<20} {'Hours':>8} {'Gross':>14} {'Total':>14}", file=out)
        for total in result.top_staff_by_cost(limit=len(result.staff_costs)):
            print(
                f"  {total.display_name[:20]:<20} {total.total_hours:>8.2f} "
                f"{total.gross_pay:>14,.2f} {total.total_cost:>14,.2f}",
                file=out,
            )


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    # Lazy imports so we fail fast on args first
    from budget_config import get_budget_template, load_budget_template
    from budget_ingestion.domain import validate_period
    from budget_ingestion.services import load_calculation_inputs
    from budget_kernel.exceptions import BudgetKernelError
    from budget_kernel.logging_config import LogContext, configure_logging
    from budget_services import BudgetCalculationService

    configure_logging(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        fmt=args.log_format,
    )

    try:
        with LogContext.bind(correlation_id=f"cli-{args.shop_id}"):
            validate_period(args.period_start, args.period_end)
            template = (
                load_budget_template(args.template)
                if args.template is not None
                else get_budget_template()
            )
            inputs = load_calculation_inputs(args.roster, args.shifts, shop_id=args.shop_id)
            result = BudgetCalculationService().calculate_period(
                shop_id=args.shop_id,
                period_start=args.period_start,
                period_end=args.period_end,
                roster=inputs.roster,
                shifts=inputs.shifts,
                assumptions=template,
                budget_ceiling=args.budget,
                created_by=args.created_by,
            )
    except BudgetKernelError as e:
        print(f"ERROR [{e.code}]: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e.filename}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        print(f"ERROR: Unreadable input: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.json:
        json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    else:
        _print_summary(result, sys.stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
