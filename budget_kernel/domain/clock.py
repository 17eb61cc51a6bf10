"""
Clock -- injectable source of "now" for budget calculations.

The engines never read the time.  The orchestrator stamps each
CalculationResult with ``created_at`` from the Clock it was built with, so
tests pin that stamp with DeterministicClock and production uses
SystemClock.

Shops schedule in local time; ``today()`` answers "which calendar day is it
for this shop", which is what callers need when defaulting a period to the
current month.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone, tzinfo


class Clock(ABC):
    """Returns timezone-aware datetimes."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self, tz: tzinfo | None = None) -> date:
        """Calendar date of ``now()``, optionally seen from ``tz``."""
        current = self.now()
        return (current.astimezone(tz) if tz is not None else current).date()


class SystemClock(Clock):
    """Wall-clock time in a fixed zone (UTC unless told otherwise)."""

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class DeterministicClock(Clock):
    """
    Frozen time for tests.

    ``now()`` repeats until ``advance()`` or ``set_time()`` moves it.
    Naive datetimes are taken as UTC.
    """

    DEFAULT_TIME = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._current = self._aware(fixed_time or self.DEFAULT_TIME)

    @staticmethod
    def _aware(value: datetime) -> datetime:
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current

    def set_time(self, value: datetime) -> None:
        self._current = self._aware(value)

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)
