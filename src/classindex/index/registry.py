"""Registration of tracked annotations, superclasses and packages.

Two modes:

- annotation-driven (default): a declaration is tracked when it carries a
  marker decorator (``index_annotated`` on annotation types,
  ``index_subclasses`` on classes and packages).
- explicit: any call to a ``register_*`` method switches the whole session
  to explicit registration and disables marker discovery entirely.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from classindex.config.constants import (
    INDEX_ANNOTATED_MARKER,
    INDEX_SUBCLASSES_MARKER,
    STORE_DOCS_OPTION,
)
from classindex.core.errors import IndexingError
from classindex.index.models import IndexKind, PackageDeclaration, TypeDeclaration

if TYPE_CHECKING:
    from classindex.config.models import IndexerConfig

_MARKERS: dict[IndexKind, str] = {
    IndexKind.ANNOTATED: INDEX_ANNOTATED_MARKER,
    IndexKind.SUBCLASS: INDEX_SUBCLASSES_MARKER,
    IndexKind.PACKAGE: INDEX_SUBCLASSES_MARKER,
}


@dataclass(frozen=True, slots=True)
class MarkerMatch:
    """Outcome of classifying a candidate key as tracked."""

    store_docs: bool = False


_EXPLICIT = MarkerMatch()


class IndexRegistry:
    """Active tracked keys for one indexing session."""

    def __init__(self) -> None:
        self._tracked: dict[IndexKind, set[str]] = {kind: set() for kind in IndexKind}
        self._annotation_driven = True
        self._frozen = False

    @classmethod
    def from_config(cls, config: IndexerConfig) -> IndexRegistry:
        registry = cls()
        registry.register_annotations(config.annotations)
        registry.register_superclasses(config.superclasses)
        registry.register_packages(config.packages)
        return registry

    @property
    def annotation_driven(self) -> bool:
        return self._annotation_driven

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting registrations. Called when indexing starts."""
        self._frozen = True

    def _register(self, kind: IndexKind, name: str) -> None:
        if self._frozen:
            raise IndexingError.registry_frozen(name)
        self._tracked[kind].add(name)
        self._annotation_driven = False

    def register_annotation(self, name: str) -> None:
        self._register(IndexKind.ANNOTATED, name)

    def register_superclass(self, name: str) -> None:
        self._register(IndexKind.SUBCLASS, name)

    def register_package(self, name: str) -> None:
        self._register(IndexKind.PACKAGE, name)

    def register_annotations(self, names: Iterable[str]) -> None:
        for name in names:
            self.register_annotation(name)

    def register_superclasses(self, names: Iterable[str]) -> None:
        for name in names:
            self.register_superclass(name)

    def register_packages(self, names: Iterable[str]) -> None:
        for name in names:
            self.register_package(name)

    def tracked(self, kind: IndexKind) -> frozenset[str]:
        return frozenset(self._tracked[kind])

    def is_tracked(self, kind: IndexKind, name: str) -> bool:
        return name in self._tracked[kind]

    def marker_for(
        self, kind: IndexKind, declaration: TypeDeclaration | PackageDeclaration
    ) -> MarkerMatch | None:
        """Return the marker carried by ``declaration`` for ``kind``, if any.

        Always None in explicit mode.
        """
        if not self._annotation_driven:
            return None
        marker = declaration.find_annotation(_MARKERS[kind])
        if marker is None:
            return None
        return MarkerMatch(store_docs=bool(marker.values.get(STORE_DOCS_OPTION, False)))

    def classify(
        self, kind: IndexKind, declaration: TypeDeclaration | PackageDeclaration
    ) -> MarkerMatch | None:
        """Tracked-or-marked check. None means ``declaration`` is not a key."""
        if self.is_tracked(kind, declaration.qualified_name):
            return _EXPLICIT
        return self.marker_for(kind, declaration)
