"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the reference and input types every budget computation is
    built from: StaffProfile, TimeSlot, ShiftDay, DayType and
    RateAssumptions, plus the Decimal helpers used for money precision.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by engines, services, config and ingestion.  No outward
    dependencies.

Invariants enforced:
    - All rates, bonuses and amounts are ``Decimal`` (never float).
    - RateAssumptions: overtime multiplier > 1, social insurance and tax
      rates within [0, 1], bonuses and base rate non-negative.
    - Every value object is frozen; collections are stored as tuples or
      read-only mappings.

Failure modes:
    - ValueError on construction of RateAssumptions with out-of-range rates.
    - TimeSlot/ShiftDay do NOT validate time ordering: a slot whose end
      precedes its start is a legal value and yields a negative duration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

MONEY_PRECISION = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """
    Coerce a numeric value to Decimal via its string form.

    Floats are routed through ``str`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"Invalid numeric value: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}")
    return result


def quantize_money(amount: Decimal) -> Decimal:
    """Round a monetary amount to MONEY_PRECISION (half-up)."""
    return amount.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def parse_clock_time(value: str) -> tuple[int, int]:
    """
    Split an "HH:MM" wall-clock string into (hour, minute).

    Only the shape is checked here; range validation of caller input
    belongs to ingestion.

    Raises:
        ValueError: If the string is not two colon-separated integers.
    """
    hour, sep, minute = str(value).strip().partition(":")
    if not sep:
        raise ValueError(f"Invalid clock time: {value!r}")
    try:
        return int(hour), int(minute)
    except ValueError as e:
        raise ValueError(f"Invalid clock time: {value!r}") from e


def minutes_between(start_time: str, end_time: str) -> int:
    """Minutes from one "HH:MM" to another on the same day; negative when reversed."""
    start_hour, start_minute = parse_clock_time(start_time)
    end_hour, end_minute = parse_clock_time(end_time)
    return (end_hour * 60 + end_minute) - (start_hour * 60 + start_minute)


class DayType(str, Enum):
    """Calendar classification of a shift date; drives which bonus applies."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class StaffProfile:
    """A staff member as seen by the budget engine. Immutable reference data."""

    staff_id: str
    display_name: str
    hourly_rate: Decimal | None = None

    def __post_init__(self) -> None:
        if self.hourly_rate is not None and not isinstance(self.hourly_rate, Decimal):
            object.__setattr__(self, "hourly_rate", to_decimal(self.hourly_rate))


@dataclass(frozen=True)
class TimeSlot:
    """
    A contiguous work block within a shift day.

    Start and end are wall-clock "HH:MM" strings on the same day.  The
    slot is assumed not to span midnight.
    """

    slot_id: str
    start_time: str
    end_time: str
    assigned_staff_ids: tuple[str, ...] = ()
    required_staff: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.assigned_staff_ids, tuple):
            object.__setattr__(self, "assigned_staff_ids", tuple(self.assigned_staff_ids))

    @property
    def duration_minutes(self) -> int:
        """Minutes between start and end; negative when end precedes start."""
        return minutes_between(self.start_time, self.end_time)

    @property
    def is_understaffed(self) -> bool:
        """True when fewer staff are assigned than the slot requires."""
        return len(self.assigned_staff_ids) < self.required_staff


@dataclass(frozen=True)
class ShiftDay:
    """A scheduled date and its ordered time slots."""

    shift_id: str
    shift_date: date
    slots: tuple[TimeSlot, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.slots, tuple):
            object.__setattr__(self, "slots", tuple(self.slots))


_DEFAULT_BASE_HOURLY_RATE = Decimal("1000")
_DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.25")
_DEFAULT_NIGHT_SHIFT_BONUS = Decimal("250")
_DEFAULT_WEEKEND_BONUS = Decimal("200")
_DEFAULT_HOLIDAY_BONUS = Decimal("300")
_DEFAULT_SOCIAL_INSURANCE_RATE = Decimal("0.15")
_DEFAULT_TAX_RATE = Decimal("0.10")

_DECIMAL_FIELDS = (
    "base_hourly_rate",
    "overtime_multiplier",
    "night_shift_bonus_per_hour",
    "weekend_bonus_per_hour",
    "holiday_bonus_per_hour",
    "social_insurance_rate",
    "tax_rate",
)


@dataclass(frozen=True)
class RateAssumptions:
    """
    Rates applied to one budget calculation.

    Contract:
        Supplied per calculation; every field has a documented default so
        ``RateAssumptions()`` is always usable.  ``staff_rates`` maps staff
        ids to per-staff hourly overrides.

    Guarantees:
        - All numeric fields are Decimal.
        - ``staff_rates`` is a read-only mapping of str -> Decimal.

    Raises:
        ValueError: On construction with out-of-range values.
    """

    base_hourly_rate: Decimal = _DEFAULT_BASE_HOURLY_RATE
    overtime_multiplier: Decimal = _DEFAULT_OVERTIME_MULTIPLIER
    night_shift_bonus_per_hour: Decimal = _DEFAULT_NIGHT_SHIFT_BONUS
    weekend_bonus_per_hour: Decimal = _DEFAULT_WEEKEND_BONUS
    holiday_bonus_per_hour: Decimal = _DEFAULT_HOLIDAY_BONUS
    social_insurance_rate: Decimal = _DEFAULT_SOCIAL_INSURANCE_RATE
    tax_rate: Decimal = _DEFAULT_TAX_RATE
    staff_rates: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _DECIMAL_FIELDS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(
            self,
            "staff_rates",
            MappingProxyType(
                {str(k): to_decimal(v) for k, v in dict(self.staff_rates).items()}
            ),
        )

        if self.base_hourly_rate <= ZERO:
            raise ValueError("base_hourly_rate must be positive")
        if self.overtime_multiplier <= Decimal("1"):
            raise ValueError("overtime_multiplier must be greater than 1.0")
        for name in (
            "night_shift_bonus_per_hour",
            "weekend_bonus_per_hour",
            "holiday_bonus_per_hour",
        ):
            if getattr(self, name) < ZERO:
                raise ValueError(f"{name} cannot be negative")
        for name in ("social_insurance_rate", "tax_rate"):
            value = getattr(self, name)
            if value < ZERO or value > Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        for staff_id, rate in self.staff_rates.items():
            if rate <= ZERO:
                raise ValueError(f"staff rate for {staff_id} must be positive")

    def __hash__(self) -> int:
        return hash(
            tuple(getattr(self, name) for name in _DECIMAL_FIELDS)
            + (tuple(sorted(self.staff_rates.items())),)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RateAssumptions):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name) for name in _DECIMAL_FIELDS
        ) and dict(self.staff_rates) == dict(other.staff_rates)

    @classmethod
    def with_defaults(cls) -> RateAssumptions:
        """Create assumptions with the documented default rates."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; Decimals rendered as strings."""
        data: dict[str, Any] = {name: str(getattr(self, name)) for name in _DECIMAL_FIELDS}
        data["staff_rates"] = {k: str(v) for k, v in sorted(self.staff_rates.items())}
        return data
