from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "eatin"

_FRAMEWORKS = {
    "fastapi",
    "starlette",
    "pydantic",
    "sqlalchemy",
    "alembic",
    "redis",
    "opentelemetry",
}

# layer -> modules it must not import
LAYER_RULES: dict[str, set[str]] = {
    "domain": _FRAMEWORKS
    | {"prometheus_client", "eatin.application", "eatin.infrastructure", "eatin.api"},
    # pydantic for DTOs; the opentelemetry API for spans around transitions
    "application": (_FRAMEWORKS - {"pydantic", "opentelemetry"})
    | {"opentelemetry.sdk", "eatin.infrastructure", "eatin.api"},
}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    layer: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches(module: str, forbidden: set[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _scan_file(file_path: Path, layer: str) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    forbidden = LAYER_RULES[layer]
    return [
        Violation(file_path=file_path, line=line, module=module, layer=layer)
        for line, module in _imported_modules(tree)
        if _matches(module, forbidden)
    ]


def find_violations(targets: Sequence[tuple[str, Path]]) -> list[Violation]:
    violations: list[Violation] = []
    for layer, path in targets:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, layer))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Layer import policy check for src/eatin.")
    parser.add_argument(
        "--layer",
        nargs=2,
        action="append",
        default=[],
        metavar=("LAYER", "PATH"),
        help=f"Scan PATH with the rules of LAYER ({', '.join(LAYER_RULES)}). Repeatable. "
        "Defaults to every layer under src/eatin.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.layer:
        unknown = [layer for layer, _ in args.layer if layer not in LAYER_RULES]
        if unknown:
            print(f"unknown layer(s): {', '.join(unknown)}")
            return 2
        targets = [(layer, Path(path)) for layer, path in args.layer]
    else:
        targets = [(layer, PACKAGE_ROOT / layer) for layer in LAYER_RULES]

    violations = find_violations(targets)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} [{violation.layer}] -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
