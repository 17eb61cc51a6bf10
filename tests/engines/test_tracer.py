"""Tests for the @traced_engine decorator and input fingerprints."""

from decimal import Decimal

import pytest

from budget_engines.slot_cost import SlotCostCalculator
from budget_engines.tracer import compute_input_fingerprint, traced_engine
from budget_kernel.domain.values import DayType, RateAssumptions, TimeSlot


class TestInputFingerprint:

    def test_deterministic(self):
        kwargs = {"slot": TimeSlot("s1", "09:00", "18:00", ("a",)), "day_type": "weekday"}
        fp1 = compute_input_fingerprint(("slot", "day_type"), kwargs)
        fp2 = compute_input_fingerprint(("slot", "day_type"), dict(kwargs))
        assert fp1 == fp2
        assert len(fp1) == 16

    def test_differs_on_input(self):
        a = compute_input_fingerprint(("x",), {"x": Decimal("1")})
        b = compute_input_fingerprint(("x",), {"x": Decimal("2")})
        assert a != b

    def test_mapping_key_order_irrelevant(self):
        a = compute_input_fingerprint(("m",), {"m": {"a": 1, "b": 2}})
        b = compute_input_fingerprint(("m",), {"m": {"b": 2, "a": 1}})
        assert a == b

    def test_missing_field_recorded_as_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(("x",), {"x": None})


class TestTracedEngine:

    def test_result_passed_through(self):
        @traced_engine("demo", "1.0", fingerprint_fields=("value",))
        def double(*, value):
            return value * 2

        assert double(value=21) == 42
        assert double.__name__ == "double"

    def test_emits_trace_record(self, captured_logs):
        @traced_engine("demo", "2.1", fingerprint_fields=("value",))
        def identity(*, value):
            return value

        identity(value="x")

        traces = [r for r in captured_logs() if r["message"] == "BUDGET_ENGINE_TRACE"]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["trace_type"] == "BUDGET_ENGINE_TRACE"
        assert trace["engine_name"] == "demo"
        assert trace["engine_version"] == "2.1"
        assert trace["input_fingerprint"] == compute_input_fingerprint(("value",), {"value": "x"})
        assert trace["duration_ms"] >= 0

    def test_error_outcome_logged_and_reraised(self, captured_logs):
        @traced_engine("demo", "1.0")
        def broken():
            raise ZeroDivisionError("x")

        with pytest.raises(ZeroDivisionError):
            broken()

        (trace,) = [r for r in captured_logs() if r["message"] == "BUDGET_ENGINE_TRACE"]
        assert trace["outcome"] == "error"
        assert trace["input_fingerprint"] == ""

    def test_slot_calculation_traced(self, captured_logs, roster_by_id, assumptions):
        SlotCostCalculator().calculate(
            slot=TimeSlot("s1", "09:00", "18:00", ("alice",)),
            roster=roster_by_id,
            assumptions=assumptions,
            day_type=DayType.WEEKDAY,
        )

        traces = [r for r in captured_logs() if r.get("engine_name") == "slot_cost"]
        assert len(traces) == 1
        assert traces[0]["outcome"] == "ok"
        assert traces[0]["function"] == "SlotCostCalculator.calculate"

    def test_fingerprint_covers_only_named_fields(self, captured_logs, roster_by_id):
        slot = TimeSlot("s1", "09:00", "18:00", ("alice",))
        calculator = SlotCostCalculator()
        for rate in ("1000", "2000"):
            calculator.calculate(
                slot=slot,
                roster=roster_by_id,
                assumptions=RateAssumptions(base_hourly_rate=Decimal(rate)),
                day_type=DayType.WEEKDAY,
            )

        first, second = [r for r in captured_logs() if r.get("engine_name") == "slot_cost"]
        assert first["input_fingerprint"] == second["input_fingerprint"]
        assert first["input_fingerprint"] == compute_input_fingerprint(
            ("slot", "day_type"), {"slot": slot, "day_type": DayType.WEEKDAY},
        )


class TestDataclassFingerprint:

    def test_equal_slots_fingerprint_equal(self):
        a = TimeSlot("s1", "09:00", "18:00", ("a", "b"))
        b = TimeSlot("s1", "09:00", "18:00", ("a", "b"))
        assert compute_input_fingerprint(("slot",), {"slot": a}) == compute_input_fingerprint(
            ("slot",), {"slot": b}
        )

    def test_assignment_change_changes_fingerprint(self):
        a = TimeSlot("s1", "09:00", "18:00", ("a",))
        b = TimeSlot("s1", "09:00", "18:00", ("b",))
        assert compute_input_fingerprint(("slot",), {"slot": a}) != compute_input_fingerprint(
            ("slot",), {"slot": b}
        )

    def test_enum_uses_value(self):
        assert compute_input_fingerprint(("d",), {"d": DayType.WEEKEND}) == compute_input_fingerprint(
            ("d",), {"d": "weekend"}
        )

    def test_trailing_zero_amounts_equal(self):
        assert compute_input_fingerprint(("x",), {"x": Decimal("1.50")}) == compute_input_fingerprint(
            ("x",), {"x": Decimal("1.5")}
        )
