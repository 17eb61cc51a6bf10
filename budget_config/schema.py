"""
Budget template schema.

A BudgetTemplate is the human-authored, reviewable source of the rates a
shop budgets with: the RateAssumptions, the holiday list used for
day-type classification, and an optional default budget ceiling.  YAML
files are parsed into these types by ``budget_config.loader``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from budget_engines.calendar import DEFAULT_HOLIDAYS
from budget_kernel.domain.values import RateAssumptions


@dataclass(frozen=True)
class BudgetTemplate:
    """Rates, holidays and default ceiling for budget calculations."""

    name: str
    assumptions: RateAssumptions
    budget_ceiling: Decimal | None = None
    holidays: frozenset[tuple[int, int]] = DEFAULT_HOLIDAYS
    description: str = ""

    @classmethod
    def default(cls) -> BudgetTemplate:
        """Template carrying the documented default rates and holidays."""
        return cls(name="default", assumptions=RateAssumptions.with_defaults())

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping used for checksums and CLI output."""
        return {
            "name": self.name,
            "description": self.description,
            "budget_ceiling": str(self.budget_ceiling) if self.budget_ceiling is not None else None,
            "holidays": [f"{m:02d}-{d:02d}" for m, d in sorted(self.holidays)],
            "rates": self.assumptions.to_dict(),
        }
