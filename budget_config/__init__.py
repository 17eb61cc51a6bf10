"""
budget_config -- public entrypoint for budget templates.

Responsibility:
    Provides ``get_budget_template()``, the way callers obtain the rates,
    holidays and default ceiling a calculation should use.  Templates are
    YAML files parsed by ``budget_config.loader`` into the frozen
    ``BudgetTemplate``.

Architecture position:
    Configuration -- sits above ``budget_kernel`` and ``budget_engines`` and
    below ``budget_services`` / ``scripts``.  The kernel and the engines
    MUST NEVER import from ``budget_config``.

Invariants enforced:
    - Deterministic loading: the same YAML always produces an equal
      ``BudgetTemplate`` and the same checksum.
    - Every successful ``get_budget_template()`` call emits a
      ``BUDGET_CONFIG_TRACE`` log entry with the template name and checksum,
      so a calculation can be tied back to the exact rates that priced it.

Failure modes:
    - ``TemplateNotFoundError`` -- no template of that name / path.
    - ``InvalidTemplateError`` -- malformed YAML or out-of-range rates.
"""

from __future__ import annotations

import logging
from pathlib import Path

from budget_config.loader import (
    compute_checksum,
    load_budget_template,
    load_yaml_file,
    parse_budget_template,
)
from budget_config.schema import BudgetTemplate

_logger = logging.getLogger("budget_kernel.config")

# Bundled templates directory
_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE_NAME = "standard"


def get_budget_template(
    name: str | None = None,
    template_dir: Path | None = None,
) -> BudgetTemplate:
    """Load a named template from the templates directory.

    Args:
        name: Template name (file stem).  Defaults to ``"standard"``.
        template_dir: Override directory.  Defaults to
            budget_config/templates/.

    Returns:
        The parsed BudgetTemplate.

    Raises:
        TemplateNotFoundError: If ``<template_dir>/<name>.yaml`` is missing.
        InvalidTemplateError: If the template fails to parse or validate.
    """
    directory = template_dir or _DEFAULT_TEMPLATE_DIR
    template = load_budget_template(directory / f"{name or DEFAULT_TEMPLATE_NAME}.yaml")

    _logger.info(
        "BUDGET_CONFIG_TRACE",
        extra={
            "trace_type": "BUDGET_CONFIG_TRACE",
            "template_name": template.name,
            "checksum": compute_checksum(template),
            "budget_ceiling": (
                str(template.budget_ceiling) if template.budget_ceiling is not None else None
            ),
        },
    )
    return template


__all__ = [
    "BudgetTemplate",
    "DEFAULT_TEMPLATE_NAME",
    "compute_checksum",
    "get_budget_template",
    "load_budget_template",
    "load_yaml_file",
    "parse_budget_template",
]
