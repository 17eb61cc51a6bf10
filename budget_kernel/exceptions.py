"""
Typed exception hierarchy for the budget kernel.

The calculation engines never raise on well-typed input: unknown staff,
reversed time ranges and missing rates are absorbed.  Everything in this
module belongs to the layers that sit *in front of* the engines -- record
parsing, template loading, period validation -- so callers can report a
bad input before any cost is computed.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BudgetKernelError (base)
    |
    +-- InputError
    |   +-- MissingFieldError
    |   +-- InvalidTimeFormatError
    |   +-- InvalidDateError
    |   +-- InvalidAmountError
    |   +-- DuplicateStaffError
    |
    +-- ConfigError
    |   +-- TemplateNotFoundError
    |   +-- InvalidTemplateError
    |
    +-- PeriodError
        +-- InvalidPeriodError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category | Code                 | When Raised
---------|----------------------|------------------------------------------------
Input    | MISSING_FIELD        | Roster/shift record lacks a required field
         | INVALID_TIME_FORMAT  | Slot time is not a valid "HH:MM" string
         | INVALID_DATE         | Shift date is not an ISO date
         | INVALID_AMOUNT       | Rate/ceiling is not a finite, non-negative number
         | DUPLICATE_STAFF      | Same staff id appears twice in the roster
---------|----------------------|------------------------------------------------
Config   | TEMPLATE_NOT_FOUND   | Budget template file does not exist
         | INVALID_TEMPLATE     | Template YAML is malformed or out of range
---------|----------------------|------------------------------------------------
Period   | INVALID_PERIOD       | Period end precedes period start

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        inputs = load_calculation_inputs(roster_path, shifts_path)
    except InvalidTimeFormatError as e:
        report(f"Bad time {e.value!r} in {e.field_name}")
    except InputError as e:
        report(e.code)
"""


class BudgetKernelError(Exception):
    """
    Base exception for all budget kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "BUDGET_KERNEL_ERROR"


# Input-related exceptions


class InputError(BudgetKernelError):
    """Base exception for caller-supplied record errors."""

    code: str = "INPUT_ERROR"


class MissingFieldError(InputError):
    """A required field is absent from a source record."""

    code: str = "MISSING_FIELD"

    def __init__(self, record_type: str, field_name: str, source_row: int | None = None):
        self.record_type = record_type
        self.field_name = field_name
        self.source_row = source_row
        location = f" (row {source_row})" if source_row is not None else ""
        super().__init__(
            f"{record_type} record is missing required field '{field_name}'{location}"
        )


class InvalidTimeFormatError(InputError):
    """A wall-clock time is not a valid HH:MM string."""

    code: str = "INVALID_TIME_FORMAT"

    def __init__(self, value: object, field_name: str):
        self.value = value
        self.field_name = field_name
        super().__init__(f"Invalid time for {field_name}: {value!r} (expected HH:MM)")


class InvalidDateError(InputError):
    """A shift date is not an ISO-format date."""

    code: str = "INVALID_DATE"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid shift date: {value!r} (expected YYYY-MM-DD)")


class InvalidAmountError(InputError):
    """A rate or budget figure is not a usable non-negative number."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, value: object, field_name: str):
        self.value = value
        self.field_name = field_name
        super().__init__(f"Invalid amount for {field_name}: {value!r}")


class DuplicateStaffError(InputError):
    """The roster lists the same staff id more than once."""

    code: str = "DUPLICATE_STAFF"

    def __init__(self, staff_id: str):
        self.staff_id = staff_id
        super().__init__(f"Duplicate staff id in roster: {staff_id}")


# Configuration exceptions


class ConfigError(BudgetKernelError):
    """Base exception for budget template errors."""

    code: str = "CONFIG_ERROR"


class TemplateNotFoundError(ConfigError):
    """Budget template file does not exist."""

    code: str = "TEMPLATE_NOT_FOUND"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Budget template not found: {path}")


class InvalidTemplateError(ConfigError):
    """Budget template could not be parsed or failed validation."""

    code: str = "INVALID_TEMPLATE"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid budget template {path}: {reason}")


# Period exceptions


class PeriodError(BudgetKernelError):
    """Base exception for calculation period errors."""

    code: str = "PERIOD_ERROR"


class InvalidPeriodError(PeriodError):
    """Period end precedes period start."""

    code: str = "INVALID_PERIOD"

    def __init__(self, period_start: str, period_end: str):
        self.period_start = period_start
        self.period_end = period_end
        super().__init__(
            f"Invalid period: end {period_end} precedes start {period_start}"
        )
