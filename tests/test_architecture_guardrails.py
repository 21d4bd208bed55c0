from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    names: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            names.append(node.module or "")
    return names


def _violations(root: Path, forbidden: tuple[str, ...]) -> list[tuple[str, str]]:
    found = []
    for path in _python_files(root):
        for name in _imported_modules(path):
            if any(name == f or name.startswith(f + ".") for f in forbidden):
                found.append((str(path.relative_to(ROOT)), name))
    return found


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(ROOT):
        lines = len(path.read_text(encoding="utf-8", errors="ignore").splitlines())
        if lines > 600:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 600-line limit: {offenders}"


def test_core_layer_does_not_import_infra():
    violations = _violations(ROOT / "core", ("infra", "main"))
    assert not violations, f"Core layer imports infra: {violations}"


def test_domain_model_is_persistence_free():
    violations = _violations(ROOT / "core" / "domain", ("sqlalchemy", "alembic"))
    assert not violations, f"Domain model imports persistence: {violations}"


def test_grouping_engine_talks_to_storage_through_ports():
    violations = _violations(ROOT / "core" / "services" / "grouping", ("sqlalchemy.sql", "sqlalchemy.orm.query"))
    assert not violations, f"Grouping engine builds queries directly: {violations}"
