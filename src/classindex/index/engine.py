"""Indexing engine: traverses declarations and accumulates index memberships.

A session runs ``process_batch`` once per round of newly seen top-level
declarations and ``finalize`` once after the last round. For every root type:

1. each direct annotation that is tracked records the type under that
   annotation;
2. the full supertype closure is walked depth-first. Every tracked supertype
   records the root type, and every ``inherited`` tracked annotation found on
   a supertype records the root type under that annotation;
3. a tracked enclosing package records the type's simple name.

All state is session-scoped and cleared by ``reset``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from classindex.core.errors import ClassIndexError, IndexingError
from classindex.core.logging import get_logger
from classindex.index.docs import DocumentationWriter
from classindex.index.models import IndexKind, TypeDeclaration
from classindex.index.writer import IndexWriter, WriteReport

if TYPE_CHECKING:
    from classindex.config.models import IndexerConfig
    from classindex.index.models import Declaration
    from classindex.index.registry import IndexRegistry, MarkerMatch
    from classindex.index.resources import ResourceStore

log = get_logger("index.engine")


class ClassIndexer:
    """Accumulates annotation, subclass and package memberships for one session."""

    def __init__(
        self,
        registry: IndexRegistry,
        store: ResourceStore,
        *,
        fail_on_unresolved: bool = False,
    ) -> None:
        self.registry = registry
        self.fail_on_unresolved = fail_on_unresolved
        self._writer = IndexWriter(store)
        self._docs = DocumentationWriter(store)
        self._memberships: dict[IndexKind, dict[str, set[str]]] = {kind: {} for kind in IndexKind}
        self._failure: ClassIndexError | None = None
        self._unresolved: set[str] = set()
        self.last_report: WriteReport | None = None

    @classmethod
    def from_config(cls, config: IndexerConfig, store: ResourceStore) -> ClassIndexer:
        from classindex.index.registry import IndexRegistry

        return cls(
            IndexRegistry.from_config(config),
            store,
            fail_on_unresolved=config.on_unresolved == "fail",
        )

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def failed(self) -> bool:
        return self._failure is not None

    @property
    def documentation_stored(self) -> frozenset[str]:
        return self._docs.stored

    @property
    def documentation_written(self) -> tuple[str, ...]:
        return self._docs.written

    @property
    def unresolved(self) -> frozenset[str]:
        """References skipped because they could not be resolved."""
        return frozenset(self._unresolved)

    def memberships(self, kind: IndexKind) -> Mapping[str, frozenset[str]]:
        return {key: frozenset(members) for key, members in self._memberships[kind].items()}

    def reset(self) -> None:
        """Clear all session state so the instance can run another session."""
        for mapping in self._memberships.values():
            mapping.clear()
        self._docs.reset()
        self._unresolved.clear()
        self._failure = None
        self.last_report = None

    # ------------------------------------------------------------------
    # Host contract
    # ------------------------------------------------------------------

    def process(self, roots: Iterable[Declaration], processing_over: bool) -> bool:
        """Handle one round from the host pipeline.

        Returns False: the indexer never claims the declarations it observes.
        """
        self.process_batch(roots)
        if processing_over:
            self.finalize()
        return False

    def process_batch(self, declarations: Iterable[Declaration]) -> None:
        """Record the memberships of a batch of newly seen top-level declarations.

        Raises:
            IndexingError: If the session already failed, or on an unresolved
                reference with ``fail_on_unresolved``.
            ResourceError: If a documentation sidecar cannot be written.
        """
        self._check_alive()
        self.registry.freeze()

        count = 0
        try:
            for declaration in declarations:
                if not isinstance(declaration, TypeDeclaration):
                    continue
                self._index_type(declaration)
                count += 1
        except ClassIndexError as e:
            self._failure = e
            raise
        log.debug("batch_processed", types=count)

    def finalize(self) -> WriteReport:
        """Merge every non-empty membership into its index file.

        Raises:
            IndexingError: If the session already failed.
            ResourceError: If any index file could not be written.
        """
        self._check_alive()
        try:
            report = self._writer.write_all(self._memberships)
        except ClassIndexError as e:
            self._failure = e
            raise
        log.info(
            "index_finalized",
            files=report.total_files,
            documented=len(self._docs.written),
        )
        self.last_report = report
        return report

    def _check_alive(self) -> None:
        if self._failure is not None:
            raise IndexingError.session_failed(self._failure.message)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _index_type(self, root: TypeDeclaration) -> None:
        for annotation in root.annotations:
            if self._usable(annotation.type, root):
                self._store_annotation(annotation.type, root)

        self._index_supertypes(root, root, set())

        # root declarations are enclosed by packages
        self._store_package_member(root)

    def _index_supertypes(
        self, root: TypeDeclaration, declaration: TypeDeclaration, visited: set[str]
    ) -> None:
        for supertype in declaration.supertypes:
            if supertype.qualified_name in visited:
                continue
            visited.add(supertype.qualified_name)
            if not self._usable(supertype, declaration):
                continue

            self._store_subclass(supertype, root)

            for annotation in supertype.annotations:
                if annotation.type.is_inherited and self._usable(annotation.type, supertype):
                    self._store_annotation(annotation.type, root)

            self._index_supertypes(root, supertype, visited)

    def _usable(self, declaration: TypeDeclaration, referenced_from: TypeDeclaration) -> bool:
        if declaration.is_resolved:
            return True
        if self.fail_on_unresolved:
            raise IndexingError.unresolved_reference(
                declaration.qualified_name, referenced_from.qualified_name
            )
        if declaration.qualified_name not in self._unresolved:
            self._unresolved.add(declaration.qualified_name)
            log.warning(
                "unresolved_reference_skipped",
                name=declaration.qualified_name,
                referenced_from=referenced_from.qualified_name,
            )
        return False

    def _record(self, kind: IndexKind, key: str, member: str) -> None:
        self._memberships[kind].setdefault(key, set()).add(member)
        log.debug("membership_recorded", kind=kind.value, key=key, member=member)

    def _after_match(self, marker: MarkerMatch, root: TypeDeclaration) -> None:
        if marker.store_docs:
            self._docs.store(root)

    def _store_annotation(self, annotation_type: TypeDeclaration, root: TypeDeclaration) -> None:
        if annotation_type.qualified_name == root.qualified_name:
            return
        marker = self.registry.classify(IndexKind.ANNOTATED, annotation_type)
        if marker is None:
            return
        self._record(IndexKind.ANNOTATED, annotation_type.qualified_name, root.qualified_name)
        self._after_match(marker, root)

    def _store_subclass(self, supertype: TypeDeclaration, root: TypeDeclaration) -> None:
        if supertype.qualified_name == root.qualified_name:
            return
        marker = self.registry.classify(IndexKind.SUBCLASS, supertype)
        if marker is None:
            return
        self._record(IndexKind.SUBCLASS, supertype.qualified_name, root.qualified_name)
        self._after_match(marker, root)

    def _store_package_member(self, root: TypeDeclaration) -> None:
        package = root.package
        marker = self.registry.classify(IndexKind.PACKAGE, package)
        if marker is None:
            return
        self._record(IndexKind.PACKAGE, package.qualified_name, root.simple_name)
        self._after_match(marker, root)
