"""Build declarations from Python sources.

Classes are types, decorators are annotations and base classes are
supertypes. Names are resolved statically per module: module-level
definitions, ``import`` / ``from ... import`` aliases (relative imports
included) and builtins. Re-exports through scanned modules are followed to
the defining module.

Resolution outcome of a referenced name:
- defined in a scanned module -> the concrete declaration
- imported from outside the scanned sources, a builtin, or a name bound by
  a module-level assignment (``Base = declarative_base()``) -> ``external``
- anything else (undefined names, call expressions as bases) -> ``unresolved``
"""

from __future__ import annotations

import ast
import builtins
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from classindex.config.constants import INDEX_SUBCLASSES_MARKER
from classindex.core.errors import IndexingError
from classindex.core.logging import get_logger
from classindex.index.models import (
    Annotation,
    DeclarationKind,
    PackageDeclaration,
    TypeDeclaration,
)
from classindex.source.discovery import ModuleSource

log = get_logger("source.extraction")

# Bound on alias hops when following re-exports
_MAX_ALIAS_HOPS = 16

_Definition = ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef


@dataclass
class ModuleSymbols:
    """Top-level names of one parsed module."""

    source: ModuleSource
    tree: ast.Module
    definitions: dict[str, _Definition] = field(default_factory=dict)
    imports: dict[str, str] = field(default_factory=dict)
    # bound by module-level assignment, e.g. ``router = APIRouter()``
    assignments: set[str] = field(default_factory=set)

    @property
    def name(self) -> str:
        return self.source.name


def parse_module(source: ModuleSource) -> ModuleSymbols:
    """Parse ``source`` and collect its top-level definitions and imports.

    Raises:
        IndexingError: If the file cannot be read or is not valid Python.
    """
    try:
        text = source.path.read_text(encoding="utf-8")
        tree = ast.parse(text, filename=str(source.path))
    except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
        raise IndexingError.source_parse_error(str(source.path), str(e)) from e

    symbols = ModuleSymbols(source=source, tree=tree)
    base_package = source.name if source.is_package else source.package

    for node in tree.body:
        if isinstance(node, _Definition):
            symbols.definitions[node.name] = node
        elif isinstance(node, ast.Assign | ast.AnnAssign):
            targets = node.targets if isinstance(node, ast.Assign) else [node.target]
            symbols.assignments.update(_bound_names(targets))
        elif isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname:
                    symbols.imports[alias.asname] = alias.name
                else:
                    head = alias.name.split(".")[0]
                    symbols.imports[head] = head
        elif isinstance(node, ast.ImportFrom):
            origin = _import_origin(base_package, node)
            if origin is None:
                continue
            for alias in node.names:
                if alias.name == "*":
                    continue
                target = f"{origin}.{alias.name}" if origin else alias.name
                symbols.imports[alias.asname or alias.name] = target
    return symbols


def _bound_names(targets: list[ast.expr]) -> Iterator[str]:
    for target in targets:
        if isinstance(target, ast.Name):
            yield target.id
        elif isinstance(target, ast.Tuple | ast.List):
            yield from _bound_names(target.elts)


def _import_origin(base_package: str, node: ast.ImportFrom) -> str | None:
    if node.level == 0:
        return node.module or ""
    parts = base_package.split(".") if base_package else []
    if node.level - 1 > len(parts):
        return None
    parts = parts[: len(parts) - (node.level - 1)]
    if node.module:
        parts.append(node.module)
    return ".".join(parts)


def _literal_values(call: ast.Call) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for keyword in call.keywords:
        if keyword.arg is None:
            continue
        try:
            values[keyword.arg] = ast.literal_eval(keyword.value)
        except ValueError:
            continue
    return values


class DeclarationBuilder:
    """Links the declarations of a set of parsed modules."""

    def __init__(self, modules: Iterable[ModuleSymbols]) -> None:
        self._modules: dict[str, ModuleSymbols] = {m.name: m for m in modules}
        self._types: dict[str, TypeDeclaration] = {}
        self._external: dict[str, TypeDeclaration] = {}
        self._packages: dict[str, PackageDeclaration] = {}

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self) -> dict[str, list[TypeDeclaration]]:
        """Return the top-level classes of every module, keyed by module name."""
        roots: dict[str, list[TypeDeclaration]] = {}
        pending: list[tuple[ModuleSymbols, _Definition, TypeDeclaration]] = []

        for module in self._modules.values():
            package = self._package(module.source.package)
            classes: list[TypeDeclaration] = []
            for name, node in module.definitions.items():
                is_class = isinstance(node, ast.ClassDef)
                declaration = TypeDeclaration(
                    f"{module.name}.{name}",
                    package,
                    kind=DeclarationKind.CLASS if is_class else DeclarationKind.FUNCTION,
                    doc_comment=ast.get_docstring(node, clean=False),
                )
                self._types[declaration.qualified_name] = declaration
                pending.append((module, node, declaration))
                if is_class:
                    classes.append(declaration)
            roots[module.name] = classes

        for module, node, declaration in pending:
            declaration.annotations.extend(self._annotations(module, node.decorator_list))
            if isinstance(node, ast.ClassDef):
                declaration.supertypes.extend(self._lookup(module, base) for base in node.bases)

        for module in self._modules.values():
            if module.source.is_package:
                self._annotate_package(module)

        log.debug(
            "declarations_built",
            modules=len(self._modules),
            types=len(self._types),
            external=len(self._external),
        )
        return roots

    def _package(self, name: str) -> PackageDeclaration:
        package = self._packages.get(name)
        if package is None:
            package = PackageDeclaration(name)
            self._packages[name] = package
        return package

    def _annotate_package(self, module: ModuleSymbols) -> None:
        package = self._package(module.name)
        package.doc_comment = ast.get_docstring(module.tree, clean=False)
        for node in module.tree.body:
            if not (isinstance(node, ast.Expr) and isinstance(node.value, ast.Call)):
                continue
            if self.resolve_name(module, node.value.func) == INDEX_SUBCLASSES_MARKER:
                package.annotations.extend(self._annotations(module, [node.value]))

    def _annotations(self, module: ModuleSymbols, decorators: list[ast.expr]) -> list[Annotation]:
        annotations = []
        for decorator in decorators:
            target = decorator.func if isinstance(decorator, ast.Call) else decorator
            values = _literal_values(decorator) if isinstance(decorator, ast.Call) else {}
            annotations.append(Annotation(self._lookup(module, target), values))
        return annotations

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_name(self, module: ModuleSymbols, expr: ast.expr) -> str | None:
        """Qualified name ``expr`` refers to in ``module``, or None."""
        if isinstance(expr, ast.Name):
            if expr.id in module.definitions:
                return f"{module.name}.{expr.id}"
            if expr.id in module.imports:
                return module.imports[expr.id]
            if expr.id in module.assignments:
                return f"{module.name}.{expr.id}"
            if hasattr(builtins, expr.id):
                return f"builtins.{expr.id}"
            return None
        if isinstance(expr, ast.Attribute):
            owner = self.resolve_name(module, expr.value)
            return f"{owner}.{expr.attr}" if owner else None
        if isinstance(expr, ast.Subscript):
            # Generic[T], Base[int]
            return self.resolve_name(module, expr.value)
        return None

    def canonical(self, qualified_name: str) -> str:
        """Follow re-exports through scanned modules to the defining module."""
        name = qualified_name
        for _ in range(_MAX_ALIAS_HOPS):
            if name in self._types:
                return name
            owner, _, attr = name.rpartition(".")
            module = self._modules.get(owner)
            if module is None or attr not in module.imports:
                return name
            name = module.imports[attr]
        return name

    def _lookup(self, module: ModuleSymbols, expr: ast.expr) -> TypeDeclaration:
        name = self.resolve_name(module, expr)
        if name is None:
            return TypeDeclaration.unresolved(f"{module.name}:{ast.unparse(expr)}")

        name = self.canonical(name)
        if name in self._types:
            return self._types[name]
        owner, _, attr = name.rpartition(".")
        if owner in self._modules and attr not in self._modules[owner].assignments:
            # Scanned module without such a definition
            return TypeDeclaration.unresolved(name)
        # Assigned names are runtime values (``declarative_base()``): external

        declaration = self._external.get(name)
        if declaration is None:
            declaration = TypeDeclaration.external(name)
            self._external[name] = declaration
        return declaration
