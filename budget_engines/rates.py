"""
budget_engines.rates -- Effective hourly rate resolution.

Responsibility:
    Resolve a staff member's hourly rate through a three-tier fallback:
    per-staff override in the RateAssumptions, then the StaffProfile's own
    default rate, then the system-wide base rate.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Rate tables are built per call as a pure function of roster and
    assumptions; there is no process-wide cache.

Invariants enforced:
    - Never fails, always returns a positive Decimal.
    - Profile rates that are missing, zero or negative fall through to the
      base rate.

Failure modes:
    None.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from budget_kernel.domain.values import ZERO, RateAssumptions, StaffProfile
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.rates")


def resolve_hourly_rate(
    staff_id: str,
    profile: StaffProfile | None,
    assumptions: RateAssumptions,
) -> Decimal:
    """Return the effective hourly rate for ``staff_id``."""
    override = assumptions.staff_rates.get(staff_id)
    if override is not None:
        return override
    if profile is not None and profile.hourly_rate is not None and profile.hourly_rate > ZERO:
        return profile.hourly_rate
    return assumptions.base_hourly_rate


def build_rate_table(
    roster: Iterable[StaffProfile],
    assumptions: RateAssumptions,
) -> dict[str, Decimal]:
    """
    Build the staff id -> hourly rate map for one calculation.

    Postconditions:
        Every roster member has an entry.  Overrides for staff not on the
        roster are ignored (nobody to assign them to).
    """
    table = {
        profile.staff_id: resolve_hourly_rate(profile.staff_id, profile, assumptions)
        for profile in roster
    }
    logger.debug("rate_table_built", extra={
        "staff_count": len(table),
        "override_count": sum(1 for sid in table if sid in assumptions.staff_rates),
    })
    return table
