"""Declaration model consumed by the indexer.

Declarations are produced by a host adapter (see classindex.source) and are
read-only from the indexer's point of view. Supertypes may point at
declarations outside the batch being processed; those must still expose
their own annotations and supertypes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from classindex.config.constants import INHERITED_MARKER

# ============================================================================
# ENUMS
# ============================================================================


class IndexKind(str, Enum):
    """The three kinds of tracked keys."""

    ANNOTATED = "annotated"
    SUBCLASS = "subclass"
    PACKAGE = "package"


class DeclarationKind(str, Enum):
    """Where a type declaration came from."""

    CLASS = "class"  # class statement in scanned sources
    FUNCTION = "function"  # decorator function in scanned sources
    EXTERNAL = "external"  # imported from outside the scanned sources
    UNRESOLVED = "unresolved"  # reference the host could not resolve


# ============================================================================
# HELPERS
# ============================================================================


def split_qualified_name(qualified_name: str) -> tuple[str, str]:
    """Split 'a.b.C' into ('a.b', 'C'). Top-level names have package ''."""
    package, _, simple = qualified_name.rpartition(".")
    return package, simple


# ============================================================================
# DECLARATIONS
# ============================================================================


@runtime_checkable
class Declaration(Protocol):
    """Capability interface the indexer needs from any declaration."""

    @property
    def qualified_name(self) -> str: ...

    @property
    def simple_name(self) -> str: ...

    @property
    def annotations(self) -> Sequence[Annotation]: ...

    @property
    def doc_comment(self) -> str | None: ...


@dataclass(frozen=True)
class Annotation:
    """One annotation (decorator) attached to a declaration."""

    type: TypeDeclaration
    values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def qualified_name(self) -> str:
        return self.type.qualified_name


def _find(annotations: Sequence[Annotation], qualified_name: str) -> Annotation | None:
    for annotation in annotations:
        if annotation.qualified_name == qualified_name:
            return annotation
    return None


@dataclass(eq=False)
class PackageDeclaration:
    """A package enclosing type declarations."""

    qualified_name: str
    annotations: list[Annotation] = field(default_factory=list)
    doc_comment: str | None = None

    @property
    def simple_name(self) -> str:
        return split_qualified_name(self.qualified_name)[1]

    def find_annotation(self, qualified_name: str) -> Annotation | None:
        return _find(self.annotations, qualified_name)


@dataclass(eq=False)
class TypeDeclaration:
    """A declared type (or annotation type).

    ``supertypes`` is ordered as declared. Host adapters may fill
    ``supertypes`` and ``annotations`` after construction to link
    declarations that reference each other; the indexer never mutates them.
    """

    qualified_name: str
    package: PackageDeclaration
    kind: DeclarationKind = DeclarationKind.CLASS
    supertypes: list[TypeDeclaration] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    doc_comment: str | None = None

    @property
    def simple_name(self) -> str:
        return split_qualified_name(self.qualified_name)[1]

    @property
    def is_resolved(self) -> bool:
        return self.kind is not DeclarationKind.UNRESOLVED

    @property
    def is_inherited(self) -> bool:
        """True when this annotation type carries the ``inherited`` marker."""
        return self.find_annotation(INHERITED_MARKER) is not None

    def find_annotation(self, qualified_name: str) -> Annotation | None:
        return _find(self.annotations, qualified_name)

    @classmethod
    def external(cls, qualified_name: str) -> TypeDeclaration:
        """Declaration for a type known only by name."""
        package, _ = split_qualified_name(qualified_name)
        return cls(qualified_name, PackageDeclaration(package), kind=DeclarationKind.EXTERNAL)

    @classmethod
    def unresolved(cls, reference: str) -> TypeDeclaration:
        return cls(reference, PackageDeclaration(""), kind=DeclarationKind.UNRESOLVED)

    def __repr__(self) -> str:
        return f"TypeDeclaration({self.qualified_name!r}, kind={self.kind.value})"
