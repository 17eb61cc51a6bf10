"""
Record parsers: source dicts -> kernel value objects.

Turns roster rows into StaffProfile and shift rows into ShiftDay, raising a
typed InputError for anything the engines could not price.  Field names are
matched case- and separator-insensitively, so exports using ``staffId`` and
``staff_id`` both parse.

Reversed slot time ranges (end before start) are NOT rejected here; the
engines price them as negative time.

Architecture: budget_ingestion/domain. ZERO I/O. Imports only from budget_kernel.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, Sequence

from budget_kernel.domain.values import ShiftDay, StaffProfile, TimeSlot, to_decimal
from budget_kernel.exceptions import (
    DuplicateStaffError,
    InvalidAmountError,
    InvalidDateError,
    InvalidPeriodError,
    InvalidTimeFormatError,
    MissingFieldError,
)
from budget_kernel.logging_config import get_logger

logger = get_logger("ingestion.parsers")

_CLOCK_TIME = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

# Accepted spellings per field, already normalized.
_STAFF_ID_KEYS = ("staffid", "uid", "id")
_DISPLAY_NAME_KEYS = ("displayname", "name")
_HOURLY_RATE_KEYS = ("hourlyrate",)
_SHIFT_ID_KEYS = ("shiftid", "id")
_SLOT_ID_KEYS = ("slotid", "id")
_ASSIGNED_KEYS = ("assignedstaffids", "assignedstaff")


def _normalized(row: dict[str, Any]) -> dict[str, Any]:
    return {
        k.strip().lower().replace("_", "").replace("-", ""): v
        for k, v in row.items()
        if isinstance(k, str)
    }


def _first(row: dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def parse_clock_value(value: Any, field_name: str) -> str:
    """
    Validate an "HH:MM" wall-clock string (00-23 hours, 00-59 minutes).

    Raises:
        InvalidTimeFormatError: if the value does not match.
    """
    if not isinstance(value, str) or not _CLOCK_TIME.match(value.strip()):
        raise InvalidTimeFormatError(value, field_name)
    return value.strip()


def parse_shift_date(value: Any) -> date:
    """
    Parse an ISO date, tolerating a trailing time part ("2024-01-15T00:00:00Z").
    ``datetime`` values are reduced to their date.

    Raises:
        InvalidDateError: if the value is not an ISO date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)
    text = value.strip()
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise InvalidDateError(value) from e


def validate_period(period_start: date, period_end: date) -> None:
    """
    Reject a calculation period whose end precedes its start.

    The engines price any period they are given; this check belongs to the
    caller that accepted the bounds from a user or a file.

    Raises:
        InvalidPeriodError: ``period_end`` is before ``period_start``.
    """
    if period_end < period_start:
        logger.warning("budget_period_invalid", extra={
            "period_start": period_start.isoformat(),
            "period_end": period_end.isoformat(),
        })
        raise InvalidPeriodError(period_start.isoformat(), period_end.isoformat())


def parse_staff_record(row: dict[str, Any], source_row: int | None = None) -> StaffProfile:
    """
    Parse one roster row.

    Accepts ``staffId`` / ``staff_id`` / ``uid`` for the id, ``displayName`` /
    ``name`` for the name (defaults to the id) and an optional
    ``hourlyRate``.

    Raises:
        MissingFieldError: no staff id.
        InvalidAmountError: hourly rate present but not a non-negative number.
    """
    data = _normalized(row)
    staff_id = _first(data, _STAFF_ID_KEYS)
    if staff_id is None:
        raise MissingFieldError("staff", "staffId", source_row)
    staff_id = str(staff_id).strip()

    display_name = _first(data, _DISPLAY_NAME_KEYS)
    raw_rate = _first(data, _HOURLY_RATE_KEYS)

    hourly_rate = None
    if raw_rate is not None:
        if isinstance(raw_rate, bool):
            raise InvalidAmountError(raw_rate, "hourlyRate")
        try:
            hourly_rate = to_decimal(raw_rate)
        except ValueError as e:
            raise InvalidAmountError(raw_rate, "hourlyRate") from e
        if hourly_rate < 0:
            raise InvalidAmountError(raw_rate, "hourlyRate")

    return StaffProfile(
        staff_id=staff_id,
        display_name=str(display_name) if display_name is not None else staff_id,
        hourly_rate=hourly_rate,
    )


def parse_slot_record(
    row: dict[str, Any],
    position: int,
    source_row: int | None = None,
) -> TimeSlot:
    """
    Parse one slot of a shift row.

    ``position`` is the slot's 1-based index in its shift; it becomes the
    slot id when the record carries none.
    """
    data = _normalized(row)

    start_raw = data.get("starttime")
    if start_raw is None:
        raise MissingFieldError("slot", "startTime", source_row)
    end_raw = data.get("endtime")
    if end_raw is None:
        raise MissingFieldError("slot", "endTime", source_row)

    assigned = _first(data, _ASSIGNED_KEYS) or []
    if isinstance(assigned, str):
        assigned = [assigned]

    required = data.get("requiredstaff") or 0
    try:
        required_staff = int(required)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(required, "requiredStaff") from e

    slot_id = _first(data, _SLOT_ID_KEYS)
    return TimeSlot(
        slot_id=str(slot_id) if slot_id is not None else str(position),
        start_time=parse_clock_value(start_raw, "startTime"),
        end_time=parse_clock_value(end_raw, "endTime"),
        assigned_staff_ids=tuple(str(s).strip() for s in assigned if s is not None),
        required_staff=required_staff,
    )


def parse_shift_record(row: dict[str, Any], source_row: int | None = None) -> ShiftDay:
    """
    Parse one shift row: ``shiftId``, ISO ``date`` and a ``slots`` list.

    A missing shift id is derived from the date.

    Raises:
        MissingFieldError: no date.
        InvalidDateError: date is not ISO formatted.
        InvalidTimeFormatError: a slot time is not HH:MM.
    """
    data = _normalized(row)
    raw_date = data.get("date")
    if raw_date is None:
        raise MissingFieldError("shift", "date", source_row)
    shift_date = parse_shift_date(raw_date)

    shift_id = _first(data, _SHIFT_ID_KEYS)
    slots_raw = data.get("slots") or []
    if not isinstance(slots_raw, list):
        raise MissingFieldError("shift", "slots", source_row)

    slots = tuple(
        parse_slot_record(slot, position, source_row)
        for position, slot in enumerate(slots_raw, start=1)
        if isinstance(slot, dict)
    )
    return ShiftDay(
        shift_id=str(shift_id) if shift_id is not None else shift_date.isoformat(),
        shift_date=shift_date,
        slots=slots,
    )


def parse_roster(rows: Iterable[dict[str, Any]]) -> tuple[StaffProfile, ...]:
    """
    Parse a roster, keeping input order.

    Raises:
        DuplicateStaffError: the same staff id appears twice.
    """
    profiles: list[StaffProfile] = []
    seen: set[str] = set()
    for index, row in enumerate(rows, start=1):
        profile = parse_staff_record(row, index)
        if profile.staff_id in seen:
            raise DuplicateStaffError(profile.staff_id)
        seen.add(profile.staff_id)
        profiles.append(profile)

    logger.debug("roster_parsed", extra={"staff_count": len(profiles)})
    return tuple(profiles)


def parse_shifts(
    rows: Iterable[dict[str, Any]],
    shop_id: str | None = None,
) -> tuple[ShiftDay, ...]:
    """
    Parse shift rows, keeping input order.

    When ``shop_id`` is given, rows carrying a different ``shopId`` are
    skipped; rows without one are kept.
    """
    shifts: list[ShiftDay] = []
    skipped = 0
    for index, row in enumerate(rows, start=1):
        row_shop = _normalized(row).get("shopid")
        if shop_id is not None and row_shop is not None and str(row_shop) != shop_id:
            skipped += 1
            continue
        shifts.append(parse_shift_record(row, index))

    logger.debug("shifts_parsed", extra={
        "shift_count": len(shifts),
        "skipped_other_shop": skipped,
    })
    return tuple(shifts)
