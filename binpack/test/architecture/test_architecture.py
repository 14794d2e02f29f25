from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def binpack_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    root = binpack_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if any(part.startswith(".") or part == "__pycache__" for part in rel.parts):
            continue
        files.append(path)
    return files


def source_files() -> list[Path]:
    root = binpack_root()
    return [p for p in iter_python_files(root) if p.relative_to(root).parts[0] != "test"]


def read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _package_of(path: Path) -> list[str]:
    rel = path.relative_to(binpack_root().parent).with_suffix("")
    return list(rel.parts[:-1])


def parse_imports(path: Path) -> list[ImportRef]:
    """Imported module names; relative imports are resolved to absolute ones."""
    imports: list[ImportRef] = []
    for node in ast.walk(read_tree(path)):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(module=a.name, line=node.lineno) for a in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = _package_of(path)
                base = base[: len(base) - node.level + 1]
                module = ".".join([*base, node.module] if node.module else base)
            elif node.module is None:
                continue
            else:
                module = node.module
            imports.append(ImportRef(module=module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


# Packages each layer may import from, besides itself.
LAYERS: dict[str, set[str]] = {
    "core": set(),
    "platform": {"core"},
    "npm": {"core", "platform"},
    "output": {"core", "npm"},
    "services": {"core", "platform", "npm", "output"},
    "cli": {"core", "platform", "npm", "output", "services"},
}


@pytest.mark.parametrize("layer", sorted(LAYERS))
def test_layer_imports(layer: str) -> None:
    root = binpack_root()
    allowed = LAYERS[layer] | {layer}
    offenders: list[str] = []

    for file_path in iter_python_files(root / layer):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if not matches_prefix(item.module, "binpack"):
                continue
            parts = item.module.split(".")
            if len(parts) < 2:
                continue
            if parts[1] not in allowed:
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_console() -> None:
    root = binpack_root()
    offenders: list[str] = []
    for file_path in source_files():
        rel = file_path.relative_to(root).as_posix()
        if rel == "output/console.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: direct rich import '{item.module}'")

    assert not offenders, "Direct rich usage:\n" + "\n".join(offenders)


def test_subprocess_is_only_used_by_process_module() -> None:
    root = binpack_root()
    offenders: list[str] = []
    for file_path in source_files():
        rel = file_path.relative_to(root).as_posix()
        if rel == "platform/process.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "subprocess"):
                offenders.append(f"{rel}:{item.line}: subprocess import outside process.py")

    assert not offenders, "Subprocess usage:\n" + "\n".join(offenders)


def test_import_resolution_of_relative_imports() -> None:
    root = binpack_root()
    modules = {i.module for i in parse_imports(root / "services" / "build.py")}
    assert "binpack.npm.dispatcher" in modules
    assert "binpack.services.base" in modules
