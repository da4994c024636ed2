from __future__ import annotations

import ast
from collections.abc import Iterable
from pathlib import Path

# Layering (low -> high): core -> engine -> orchestrators.
# A module may only import from its own layer or below.
PACKAGE_ROOT = "huffpack"

ORCH_PREFIXES: tuple[str, ...] = (
    "huffpack.cli",
    "huffpack.verify",
    "huffpack.stats",
)

SHARED: tuple[str, ...] = ("huffpack.errors",)


def _layer(mod: str) -> int:
    if any(mod == p or mod.startswith(p + ".") for p in SHARED):
        return -1
    if mod.startswith("huffpack.core"):
        return 0
    if mod.startswith("huffpack.engine") or mod == "huffpack.options":
        return 1
    if any(mod == p or mod.startswith(p + ".") for p in ORCH_PREFIXES):
        return 2
    return 1


def _module_name(src_dir: Path, py: Path) -> str:
    parts = list(py.relative_to(src_dir).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _imports(src_dir: Path) -> Iterable[tuple[str, str, Path, int]]:
    for py in sorted((src_dir / PACKAGE_ROOT).rglob("*.py")):
        mod = _module_name(src_dir, py)
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [a.name for a in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names = [node.module]
            else:
                continue
            for name in names:
                if name == PACKAGE_ROOT or name.startswith(PACKAGE_ROOT + "."):
                    yield mod, name, py, getattr(node, "lineno", 0)


def test_no_upward_imports() -> None:
    """core must not import engine/orchestrators; engine must not import orchestrators."""
    src_dir = Path(__file__).resolve().parents[1] / "src"
    assert src_dir.is_dir(), f"Expected src/ directory at: {src_dir}"

    violations = [
        f"  {py}:{lineno}  {src}  ->  {dst}"
        for src, dst, py, lineno in _imports(src_dir)
        if _layer(dst) > _layer(src)
    ]
    if violations:
        raise AssertionError("Forbidden imports detected (LOW -> HIGH):\n" + "\n".join(violations))


def test_no_relative_imports() -> None:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    for py in (src_dir / PACKAGE_ROOT).rglob("*.py"):
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom):
                assert node.level == 0, f"{py}:{node.lineno} uses a relative import"
