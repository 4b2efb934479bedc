from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def orch_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    return [p for p in sorted(base.rglob("*.py")) if "__pycache__" not in p.parts]


def parse_imports(path: Path) -> list[ImportRef]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: list[ImportRef] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(module=a.name, line=node.lineno) for a in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(package: str, forbidden: tuple[str, ...]) -> list[str]:
    root = orch_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, p) for p in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


@pytest.mark.parametrize(
    ("package", "forbidden"),
    [
        ("core", ("orch.jobs", "orch.services", "orch.events", "orch.cli", "typer", "rich")),
        ("jobs", ("orch.services", "orch.events", "orch.cli", "typer")),
        ("services", ("orch.cli", "typer")),
        ("events", ("orch.cli", "typer")),
    ],
)
def test_layers_do_not_import_upwards(package: str, forbidden: tuple[str, ...]) -> None:
    offenders = _offenders(package, forbidden)
    assert not offenders, f"{package} dependency violations:\n" + "\n".join(offenders)


def test_rich_is_only_used_by_console() -> None:
    root = orch_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root):
        rel = file_path.relative_to(root)
        if rel.parts[0] == "test" or rel == Path("output/console.py"):
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: '{item.module}'")
    assert not offenders, "rich imported outside orch.output.console:\n" + "\n".join(offenders)
