"""
Budget Template Loader (``budget_config.loader``).

Responsibility
--------------
Loads YAML budget-template files and parses them into the frozen
``budget_config.schema.BudgetTemplate``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Consumed by the CLI and by
callers that prepare inputs for ``BudgetCalculationService``.  Engines
never read configuration.

Invariants enforced
-------------------
* Numbers are converted through ``Decimal(str(value))``; YAML floats never
  reach the engines as binary floats.
* Unknown rate keys are rejected rather than silently ignored.
* ``compute_checksum`` produces a deterministic SHA-256 hash for template
  identity and change detection.

Failure modes
-------------
* Missing file  -> ``TemplateNotFoundError``.
* Malformed YAML or out-of-range values -> ``InvalidTemplateError``
  (wrapping the underlying ``yaml.YAMLError`` / ``ValueError``).

Expected YAML shape::

    name: standard
    budget_ceiling: 1000000
    rates:
      base_hourly_rate: 1000
      overtime_multiplier: 1.25
      night_shift_bonus_per_hour: 250
      weekend_bonus_per_hour: 200
      holiday_bonus_per_hour: 300
      social_insurance_rate: 0.15
      tax_rate: 0.10
    staff_rates:
      staff-a: 1200
    holidays: ["01-01", "05-03", "12-25"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from budget_config.schema import BudgetTemplate
from budget_engines.calendar import DEFAULT_HOLIDAYS
from budget_kernel.domain.values import RateAssumptions, to_decimal
from budget_kernel.exceptions import InvalidTemplateError, TemplateNotFoundError
from budget_kernel.logging_config import get_logger
from budget_kernel.utils.hashing import hash_payload

logger = get_logger("config.loader")

_RATE_KEYS = frozenset({
    "base_hourly_rate",
    "overtime_multiplier",
    "night_shift_bonus_per_hour",
    "weekend_bonus_per_hour",
    "holiday_bonus_per_hour",
    "social_insurance_rate",
    "tax_rate",
})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_holiday(value: Any) -> tuple[int, int]:
    """
    Parse a holiday given as "MM-DD" or as a [month, day] pair.

    Raises:
        ValueError: if the value is not a valid month/day.
    """
    if isinstance(value, str):
        month_str, sep, day_str = value.strip().partition("-")
        if not sep:
            raise ValueError(f"Cannot parse holiday from {value!r}")
        month, day = int(month_str), int(day_str)
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        month, day = int(value[0]), int(value[1])
    else:
        raise ValueError(f"Cannot parse holiday from {value!r}")
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ValueError(f"Holiday out of range: {value!r}")
    return month, day


def parse_rate_assumptions(data: dict[str, Any]) -> RateAssumptions:
    """
    Parse RateAssumptions from the ``rates`` and ``staff_rates`` sections.

    Missing rate keys keep their defaults.

    Raises:
        ValueError: unknown rate keys or out-of-range values.
    """
    rates = data.get("rates") or {}
    unknown = set(rates) - _RATE_KEYS
    if unknown:
        raise ValueError(f"Unknown rate keys: {sorted(unknown)}")

    kwargs: dict[str, Any] = {key: to_decimal(value) for key, value in rates.items()}
    staff_rates = data.get("staff_rates") or {}
    kwargs["staff_rates"] = {
        str(staff_id): to_decimal(rate) for staff_id, rate in staff_rates.items()
    }
    return RateAssumptions(**kwargs)


def parse_budget_template(data: dict[str, Any], source: str = "<dict>") -> BudgetTemplate:
    """
    Parse a BudgetTemplate from a dict.

    Raises:
        InvalidTemplateError: on any structural or range problem.
    """
    try:
        assumptions = parse_rate_assumptions(data)
        ceiling_raw = data.get("budget_ceiling")
        budget_ceiling = to_decimal(ceiling_raw) if ceiling_raw is not None else None
        if budget_ceiling is not None and budget_ceiling < 0:
            raise ValueError("budget_ceiling cannot be negative")
        if "holidays" in data:
            holidays = frozenset(parse_holiday(h) for h in data["holidays"] or ())
        else:
            holidays = DEFAULT_HOLIDAYS
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning("budget_template_invalid", extra={
            "source": source,
            "reason": str(e),
        })
        raise InvalidTemplateError(source, str(e)) from e

    return BudgetTemplate(
        name=str(data.get("name") or Path(source).stem),
        assumptions=assumptions,
        budget_ceiling=budget_ceiling,
        holidays=holidays,
        description=str(data.get("description", "")),
    )


def load_budget_template(path: Path | str) -> BudgetTemplate:
    """
    Load and parse a budget template YAML file.

    Raises:
        TemplateNotFoundError: if the file does not exist.
        InvalidTemplateError: if the YAML is malformed or invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise TemplateNotFoundError(str(path))

    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise InvalidTemplateError(str(path), f"malformed YAML: {e}") from e
    if not isinstance(data, dict):
        raise InvalidTemplateError(str(path), "top level must be a mapping")

    template = parse_budget_template(data, source=str(path))
    logger.info("budget_template_loaded", extra={
        "template_name": template.name,
        "path": str(path),
        "checksum": compute_checksum(template),
        "staff_override_count": len(template.assumptions.staff_rates),
        "holiday_count": len(template.holidays),
    })
    return template


def compute_checksum(template: BudgetTemplate) -> str:
    """
    Compute SHA-256 checksum of the template's canonical JSON serialization.

    Identical templates always produce identical checksums, whatever the
    key order of the source YAML.
    """
    return hash_payload(template.to_dict())
