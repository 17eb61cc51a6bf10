"""
Pytest fixtures for the labor-budget test suite.

Logging runs at DEBUG for the whole suite so every engine code path
formats its records; ``captured_logs`` exposes them to assertions.
The domain fixtures share one small roster and three reference dates.
"""

import json
import logging
from datetime import date, datetime, timezone

import pytest

from budget_kernel.domain.clock import DeterministicClock
from budget_kernel.domain.values import RateAssumptions, ShiftDay, StaffProfile, TimeSlot
from budget_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Monday, no holiday
WEEKDAY = date(2024, 1, 15)
# Saturday
SATURDAY = date(2024, 1, 20)
# Friday, May 3rd (holiday on a weekday)
HOLIDAY = date(2024, 5, 3)


class _LogCapture(logging.Handler):
    """Keeps every budget_kernel record as the JSON dict the formatter emits."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.setFormatter(StructuredFormatter())
        self.lines: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))

    def __call__(self) -> list[dict]:
        return [json.loads(line) for line in self.lines]


@pytest.fixture(autouse=True, scope="session")
def _suite_logging():
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _isolated_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Call the fixture value to get the records logged so far::

        service.calculate_period(...)
        events = [r["message"] for r in captured_logs()]
    """
    capture = _LogCapture()
    budget_logger = logging.getLogger("budget_kernel")
    saved_level = budget_logger.level
    budget_logger.setLevel(logging.DEBUG)
    budget_logger.addHandler(capture)
    try:
        yield capture
    finally:
        budget_logger.removeHandler(capture)
        budget_logger.setLevel(saved_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def assumptions():
    return RateAssumptions()


@pytest.fixture
def roster():
    """Three staff: default rate, own rate, and a zero rate that falls back."""
    return (
        StaffProfile("alice", "Alice"),
        StaffProfile("bob", "Bob", hourly_rate="1200"),
        StaffProfile("carol", "Carol", hourly_rate="0"),
    )


@pytest.fixture
def roster_by_id(roster):
    return {p.staff_id: p for p in roster}


@pytest.fixture
def weekday_shift():
    """Monday: a 9h overtime slot and a short evening slot."""
    return ShiftDay(
        shift_id="shift-mon",
        shift_date=WEEKDAY,
        slots=(
            TimeSlot("s1", "09:00", "18:00", ("alice",), required_staff=2),
            TimeSlot("s2", "17:00", "21:00", ("bob", "carol")),
        ),
    )


@pytest.fixture
def night_shift():
    """Saturday night slot."""
    return ShiftDay(
        shift_id="shift-sat",
        shift_date=SATURDAY,
        slots=(TimeSlot("n1", "22:00", "23:30", ("alice", "bob")),),
    )
