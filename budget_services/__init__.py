"""
budget_services -- Package init and public API.

Responsibility:
    Orchestration that composes the pure calculation engines
    (budget_engines/) with configuration and the injected clock.  This is
    the **only** layer that reads wall-clock time.

Architecture position:
    Services -- orchestration over engines + kernel.

    Dependency direction:
        budget_services/ -> budget_engines/  (allowed)
        budget_services/ -> budget_kernel/   (allowed)
        budget_engines/  -> budget_services/ (FORBIDDEN)
        budget_kernel/   -> budget_services/ (FORBIDDEN)

Failure modes:
    - None; ``calculate_period`` raises no domain errors.
"""

from budget_kernel.logging_config import get_logger

logger = get_logger("services")

from budget_services._calculation_types import (
    CalculationResult,
    calculation_id_for,
    default_period_label,
)
from budget_services.calculation_service import BudgetCalculationService

__all__ = [
    "BudgetCalculationService",
    "CalculationResult",
    "calculation_id_for",
    "default_period_label",
]
