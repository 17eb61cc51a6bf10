"""
Time & Calendar Utilities (``budget_engines.calendar``).

Responsibility
--------------
Pure helpers the cost calculators build on:

* slot duration in minutes between two "HH:MM" wall-clock values
* night-shift detection by hour threshold
* date -> DayType classification (weekend / fixed holiday list / weekday)

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.
May only import from ``budget_kernel.domain``.

Invariants enforced
-------------------
* Slots are intra-day: duration is end minus start on a shared day.  There
  is no guard against ``end <= start``; such slots yield zero or negative
  minutes and the cost calculators carry that sign through.
* Night detection is ``start_hour >= 22 or end_hour <= 6``.  It is an
  hour-threshold heuristic, not an interval-overlap test: 21:00-23:00 is
  NOT night, 05:00-07:00 is NOT night, 22:30-23:00 IS night.
* Holiday classification is a small fixed list of (month, day) pairs, not a
  calendar service.  Weekends win over holidays.

Failure modes
-------------
* ``ValueError`` from ``parse_clock_time`` for strings that are not
  colon-separated integers (a caller error; ingestion rejects these first).
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import date

from budget_kernel.domain.values import DayType, minutes_between, parse_clock_time

NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6

# (month, day) pairs treated as public holidays.
DEFAULT_HOLIDAYS: frozenset[tuple[int, int]] = frozenset({
    (1, 1),
    (5, 3),
    (5, 4),
    (5, 5),
    (12, 25),
})

_SATURDAY = 5
_SUNDAY = 6


def slot_duration_minutes(start_time: str, end_time: str) -> int:
    """Minutes from ``start_time`` to ``end_time`` on an assumed shared day."""
    return minutes_between(start_time, end_time)


def is_night_shift(start_time: str, end_time: str) -> bool:
    """True if the slot starts at/after 22:00 or ends at/before 06:xx."""
    start_hour, _ = parse_clock_time(start_time)
    end_hour, _ = parse_clock_time(end_time)
    return start_hour >= NIGHT_START_HOUR or end_hour <= NIGHT_END_HOUR


def classify_day(
    shift_date: date,
    holidays: Collection[tuple[int, int]] = DEFAULT_HOLIDAYS,
) -> DayType:
    """Classify a date as weekend, holiday or weekday, in that order."""
    if shift_date.weekday() in (_SATURDAY, _SUNDAY):
        return DayType.WEEKEND
    if (shift_date.month, shift_date.day) in holidays:
        return DayType.HOLIDAY
    return DayType.WEEKDAY
