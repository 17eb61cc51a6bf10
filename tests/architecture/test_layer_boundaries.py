"""
Layer boundary contract.

Tests that enforce the package dependency direction:

1. budget_kernel/** may NOT import budget_engines, budget_services,
   budget_config or budget_ingestion. The kernel never depends upward.

2. budget_engines/** may NOT import budget_services, budget_config or
   budget_ingestion, and never reads the wall clock.

3. budget_ingestion/** may NOT import budget_engines or budget_services.

These tests read source code via AST -- they cannot break anything.
"""

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _python_files(package: str) -> list[Path]:
    """Return all .py files under a top-level package."""
    return sorted((ROOT / package).rglob("*.py"))


def _extract_imports(filepath: Path) -> list[tuple[int, str]]:
    """Extract (line_number, module_string) for all imports in a file."""
    tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


_WALL_CLOCK_ATTRS = frozenset({"now", "today", "utcnow"})


def _wall_clock_calls(filepath: Path) -> list[tuple[int, str]]:
    """(line_number, dotted_call) for every ``X.now()`` / ``X.today()`` / ``X.utcnow()`` call."""
    tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    calls: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr in _WALL_CLOCK_ATTRS
        ):
            owner = node.func.value
            prefix = owner.id if isinstance(owner, ast.Name) else ast.unparse(owner)
            calls.append((node.lineno, f"{prefix}.{node.func.attr}"))
    return sorted(calls)


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for filepath in _python_files(package):
        for lineno, module in _extract_imports(filepath):
            for prefix in forbidden:
                if module == prefix or module.startswith(f"{prefix}."):
                    found.append(f"  {filepath.relative_to(ROOT)}:{lineno} imports '{module}'")
    return found


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestKernelNoUpwardDependencies:

    def test_kernel_does_not_import_higher_layers(self):
        violations = _violations(
            "budget_kernel",
            ("budget_engines", "budget_services", "budget_config", "budget_ingestion"),
        )
        assert not violations, "budget_kernel imports a higher layer:\n" + "\n".join(violations)


class TestEnginePurity:

    def test_engines_do_not_import_services_config_or_ingestion(self):
        violations = _violations(
            "budget_engines",
            ("budget_services", "budget_config", "budget_ingestion"),
        )
        assert not violations, "budget_engines imports a higher layer:\n" + "\n".join(violations)

    def test_engines_never_read_wall_clock(self):
        offenders = [
            f"{path.relative_to(ROOT)}:{lineno} calls {call}"
            for path in _python_files("budget_engines")
            for lineno, call in _wall_clock_calls(path)
        ]
        assert not offenders, "Engines read the wall clock:\n" + "\n".join(offenders)

    def test_wall_clock_detection_ignores_docstrings(self, tmp_path):
        sample = tmp_path / "sample.py"
        sample.write_text(
            '"""Never call ``datetime.now()`` here."""\n'
            "from datetime import date, datetime\n"
            "stamp = datetime.now()\n"
            "day = date.today()\n"
            "label = 'date.today()'\n",
            encoding="utf-8",
        )
        assert _wall_clock_calls(sample) == [(3, "datetime.now"), (4, "date.today")]


class TestIngestionBoundary:

    def test_ingestion_does_not_import_engines_or_services(self):
        violations = _violations("budget_ingestion", ("budget_engines", "budget_services"))
        assert not violations, "budget_ingestion imports engines/services:\n" + "\n".join(violations)
