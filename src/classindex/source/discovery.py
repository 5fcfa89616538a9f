"""Discovery of Python modules under source roots."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Never traversed: VCS internals, virtualenvs, caches and build outputs.
PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        ".git",
        ".hg",
        ".svn",
        "venv",
        ".venv",
        ".virtualenv",
        "virtualenv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        "build",
        "dist",
        "node_modules",
    )
)


@dataclass(frozen=True)
class ModuleSource:
    """One Python source file and the names it lives under."""

    name: str  # dotted module name, e.g. "pkg.sub.mod" or "pkg" for pkg/__init__.py
    path: Path
    package: str  # enclosing package of the module's classes
    is_package: bool = False


def _module_for(root: Path, path: Path) -> ModuleSource | None:
    rel = path.relative_to(root).with_suffix("")
    parts = list(rel.parts)
    if not all(part.isidentifier() for part in parts):
        return None
    if parts[-1] == "__init__":
        parts.pop()
        if not parts:
            return None
        name = ".".join(parts)
        return ModuleSource(name=name, path=path, package=name, is_package=True)
    name = ".".join(parts)
    return ModuleSource(name=name, path=path, package=".".join(parts[:-1]))


def discover_modules(roots: list[Path]) -> list[ModuleSource]:
    """Find every importable .py module under ``roots``, sorted by module name.

    A module found under more than one root keeps its first occurrence.
    """
    found: dict[str, ModuleSource] = {}
    for root in roots:
        root = root.resolve()
        if root.is_file():
            module = _module_for(root.parent, root)
            if module is not None:
                found.setdefault(module.name, module)
            continue
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(
                d for d in dirnames if d not in PRUNABLE_DIRS and not d.startswith(".")
            )
            for filename in sorted(filenames):
                if not filename.endswith(".py"):
                    continue
                module = _module_for(root, Path(dirpath) / filename)
                if module is not None:
                    found.setdefault(module.name, module)
    return [found[name] for name in sorted(found)]
