"""
Pure domain layer.

Immutable value objects and the injectable clock, with NO dependencies on
I/O, configuration files, or wall-clock time.
"""

from budget_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from budget_kernel.domain.values import (
    MONEY_PRECISION,
    DayType,
    RateAssumptions,
    ShiftDay,
    StaffProfile,
    TimeSlot,
    parse_clock_time,
    quantize_money,
    to_decimal,
)

__all__ = [
    # Clock
    "Clock",
    "DeterministicClock",
    "SystemClock",
    # Values
    "MONEY_PRECISION",
    "DayType",
    "RateAssumptions",
    "ShiftDay",
    "StaffProfile",
    "TimeSlot",
    "parse_clock_time",
    "quantize_money",
    "to_decimal",
]
