"""Tests for tracked key registration."""

import pytest

from classindex.config.models import IndexerConfig
from classindex.core.errors import IndexingError
from classindex.index.models import IndexKind
from classindex.index.registry import IndexRegistry, MarkerMatch
from tests.index.builders import annotation_type, package, subclass_marker, type_decl


class TestRegistration:
    def test_fresh_registry_is_annotation_driven(self) -> None:
        registry = IndexRegistry()

        assert registry.annotation_driven
        assert not registry.frozen

    @pytest.mark.parametrize(
        ("method", "kind"),
        [
            ("register_annotation", IndexKind.ANNOTATED),
            ("register_superclass", IndexKind.SUBCLASS),
            ("register_package", IndexKind.PACKAGE),
        ],
    )
    def test_any_registration_switches_to_explicit_mode(self, method: str, kind: IndexKind) -> None:
        registry = IndexRegistry()

        getattr(registry, method)("com.example.Key")

        assert not registry.annotation_driven
        assert registry.is_tracked(kind, "com.example.Key")

    def test_registration_is_idempotent(self) -> None:
        registry = IndexRegistry()

        registry.register_annotation("com.example.Tag")
        registry.register_annotation("com.example.Tag")

        assert registry.tracked(IndexKind.ANNOTATED) == frozenset({"com.example.Tag"})

    def test_kinds_are_separate(self) -> None:
        registry = IndexRegistry()

        registry.register_superclass("com.example.Base")

        assert not registry.is_tracked(IndexKind.ANNOTATED, "com.example.Base")

    def test_frozen_registry_rejects_registration(self) -> None:
        registry = IndexRegistry()
        registry.freeze()

        with pytest.raises(IndexingError):
            registry.register_package("com.example")

    def test_from_config(self) -> None:
        config = IndexerConfig(annotations=["a.Tag"], superclasses=["a.Base"], packages=["a"])

        registry = IndexRegistry.from_config(config)

        assert not registry.annotation_driven
        assert registry.tracked(IndexKind.ANNOTATED) == frozenset({"a.Tag"})
        assert registry.tracked(IndexKind.SUBCLASS) == frozenset({"a.Base"})
        assert registry.tracked(IndexKind.PACKAGE) == frozenset({"a"})

    def test_empty_config_stays_annotation_driven(self) -> None:
        assert IndexRegistry.from_config(IndexerConfig()).annotation_driven


class TestClassify:
    def test_marked_annotation_with_store_docs(self) -> None:
        tag = annotation_type("com.example.Tag", marked=True, store_docs=True)

        assert IndexRegistry().classify(IndexKind.ANNOTATED, tag) == MarkerMatch(store_docs=True)

    def test_subclass_marker_does_not_mark_annotations(self) -> None:
        """index_subclasses on an annotation type does not track it as an annotation."""
        tag = type_decl("com.example.Tag", annotations=(subclass_marker(),))

        assert IndexRegistry().classify(IndexKind.ANNOTATED, tag) is None
        assert IndexRegistry().classify(IndexKind.SUBCLASS, tag) == MarkerMatch()

    def test_package_marker(self) -> None:
        pkg = package("com.example", subclass_marker(store_docs=True))

        assert IndexRegistry().classify(IndexKind.PACKAGE, pkg) == MarkerMatch(store_docs=True)

    def test_markers_ignored_in_explicit_mode(self) -> None:
        registry = IndexRegistry()
        registry.register_annotation("com.example.Other")
        tag = annotation_type("com.example.Tag", marked=True)

        assert registry.marker_for(IndexKind.ANNOTATED, tag) is None
        assert registry.classify(IndexKind.ANNOTATED, tag) is None

    def test_explicit_registration_never_requests_docs(self) -> None:
        registry = IndexRegistry()
        registry.register_annotation("com.example.Tag")

        match = registry.classify(IndexKind.ANNOTATED, annotation_type("com.example.Tag"))

        assert match == MarkerMatch(store_docs=False)
