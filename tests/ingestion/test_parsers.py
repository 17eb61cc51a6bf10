"""
Tests for roster and shift record parsing.

Covers:
- Field name variants (camelCase, snake_case, uid/name)
- HH:MM validation and ISO dates
- Missing fields, bad amounts and duplicate staff
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from budget_ingestion.domain.parsers import (
    parse_clock_value,
    parse_roster,
    parse_shift_date,
    parse_shift_record,
    parse_shifts,
    parse_staff_record,
    validate_period,
)
from budget_kernel.exceptions import (
    DuplicateStaffError,
    InvalidAmountError,
    InvalidDateError,
    InvalidPeriodError,
    InvalidTimeFormatError,
    MissingFieldError,
)


class TestParseStaffRecord:

    def test_camel_case(self):
        profile = parse_staff_record({"staffId": "a", "displayName": "Aiko", "hourlyRate": 1200})
        assert profile.staff_id == "a"
        assert profile.display_name == "Aiko"
        assert profile.hourly_rate == Decimal("1200")

    def test_uid_and_name(self):
        profile = parse_staff_record({"uid": "u1", "name": "Ken"})
        assert profile.staff_id == "u1"
        assert profile.display_name == "Ken"
        assert profile.hourly_rate is None

    def test_snake_case_and_float_rate(self):
        profile = parse_staff_record({"staff_id": "s", "hourly_rate": 1050.5})
        assert profile.hourly_rate == Decimal("1050.5")
        assert profile.display_name == "s"

    def test_missing_id(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_staff_record({"name": "nobody"}, source_row=4)
        assert exc_info.value.field_name == "staffId"
        assert exc_info.value.source_row == 4

    @pytest.mark.parametrize("rate", ["abc", -100, True, "NaN"])
    def test_bad_rate(self, rate):
        with pytest.raises(InvalidAmountError):
            parse_staff_record({"staffId": "a", "hourlyRate": rate})

    def test_zero_rate_allowed(self):
        assert parse_staff_record({"staffId": "a", "hourlyRate": 0}).hourly_rate == Decimal("0")


class TestParseRoster:

    def test_order_preserved(self):
        roster = parse_roster([{"uid": "b"}, {"uid": "a"}])
        assert [p.staff_id for p in roster] == ["b", "a"]

    def test_duplicate_rejected(self):
        with pytest.raises(DuplicateStaffError) as exc_info:
            parse_roster([{"uid": "a"}, {"staffId": "a"}])
        assert exc_info.value.staff_id == "a"
        assert exc_info.value.code == "DUPLICATE_STAFF"


class TestClockAndDate:

    @pytest.mark.parametrize("value", ["00:00", "09:30", "23:59"])
    def test_valid_times(self, value):
        assert parse_clock_value(value, "startTime") == value

    @pytest.mark.parametrize("value", ["24:00", "12:60", "9:00", "0900", "", None, 900])
    def test_invalid_times(self, value):
        with pytest.raises(InvalidTimeFormatError):
            parse_clock_value(value, "startTime")

    def test_iso_date_with_time_part(self):
        assert parse_shift_date("2024-01-15T00:00:00Z") == date(2024, 1, 15)

    def test_datetime_value_reduced_to_date(self):
        parsed = parse_shift_date(datetime(2024, 1, 15, 9, 30))
        assert parsed == date(2024, 1, 15)
        assert type(parsed) is date

    @pytest.mark.parametrize("value", ["15/01/2024", "2024-13-01", 20240115])
    def test_invalid_dates(self, value):
        with pytest.raises(InvalidDateError):
            parse_shift_date(value)


class TestParseShiftRecord:

    def test_full_record(self):
        shift = parse_shift_record({
            "shiftId": "sh-1",
            "date": "2024-01-15",
            "slots": [
                {
                    "slotId": "morning",
                    "startTime": "09:00",
                    "endTime": "13:00",
                    "assignedStaff": ["a", "b"],
                    "requiredStaff": 3,
                },
                {"start_time": "13:00", "end_time": "17:00", "assigned_staff_ids": ["c"]},
            ],
        })

        assert shift.shift_id == "sh-1"
        assert shift.shift_date == date(2024, 1, 15)
        morning, afternoon = shift.slots
        assert morning.slot_id == "morning"
        assert morning.assigned_staff_ids == ("a", "b")
        assert morning.required_staff == 3
        assert morning.is_understaffed is True
        assert afternoon.slot_id == "2"
        assert afternoon.assigned_staff_ids == ("c",)
        assert afternoon.duration_minutes == 240

    def test_shift_id_defaults_to_date(self):
        shift = parse_shift_record({"date": "2024-01-15", "slots": []})
        assert shift.shift_id == "2024-01-15"
        assert shift.slots == ()

    def test_shift_id_from_datetime_has_no_time_part(self):
        shift = parse_shift_record({"date": datetime(2024, 1, 15, 9, 30), "slots": []})
        assert shift.shift_id == "2024-01-15"
        assert shift.shift_date == date(2024, 1, 15)

    def test_reversed_range_allowed(self):
        shift = parse_shift_record({
            "date": "2024-01-15",
            "slots": [{"startTime": "18:00", "endTime": "09:00"}],
        })
        assert shift.slots[0].duration_minutes == -540

    def test_missing_date(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_shift_record({"slots": []}, source_row=2)
        assert exc_info.value.record_type == "shift"

    def test_missing_slot_time(self):
        with pytest.raises(MissingFieldError):
            parse_shift_record({"date": "2024-01-15", "slots": [{"startTime": "09:00"}]})

    def test_bad_slot_time(self):
        with pytest.raises(InvalidTimeFormatError) as exc_info:
            parse_shift_record({
                "date": "2024-01-15",
                "slots": [{"startTime": "25:00", "endTime": "26:00"}],
            })
        assert exc_info.value.field_name == "startTime"


class TestParseShifts:

    def test_other_shops_skipped(self):
        rows = [
            {"shopId": "s1", "date": "2024-01-15"},
            {"shopId": "s2", "date": "2024-01-16"},
            {"date": "2024-01-17"},
        ]
        shifts = parse_shifts(rows, shop_id="s1")
        assert [s.shift_date.day for s in shifts] == [15, 17]

    def test_no_filter_keeps_all(self):
        rows = [{"shopId": "s1", "date": "2024-01-15"}, {"shopId": "s2", "date": "2024-01-16"}]
        assert len(parse_shifts(rows)) == 2


class TestValidatePeriod:

    def test_forward_and_single_day_accepted(self):
        validate_period(date(2024, 1, 1), date(2024, 1, 31))
        validate_period(date(2024, 1, 1), date(2024, 1, 1))

    def test_reversed_rejected(self, captured_logs):
        with pytest.raises(InvalidPeriodError) as exc_info:
            validate_period(date(2024, 2, 1), date(2024, 1, 1))

        assert exc_info.value.code == "INVALID_PERIOD"
        assert exc_info.value.period_start == "2024-02-01"
        assert any(r["message"] == "budget_period_invalid" for r in captured_logs())
