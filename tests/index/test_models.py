"""Tests for the declaration model."""

import pytest

from classindex.index.models import (
    Declaration,
    DeclarationKind,
    PackageDeclaration,
    TypeDeclaration,
    split_qualified_name,
)
from tests.index.builders import annotation_type, type_decl


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("com.example.Widget", ("com.example", "Widget")),
        ("Widget", ("", "Widget")),
    ],
)
def test_split_qualified_name(name: str, expected: tuple[str, str]) -> None:
    assert split_qualified_name(name) == expected


class TestTypeDeclaration:
    def test_simple_name(self) -> None:
        assert type_decl("com.example.Widget").simple_name == "Widget"

    def test_external(self) -> None:
        declaration = TypeDeclaration.external("abc.ABC")

        assert declaration.kind is DeclarationKind.EXTERNAL
        assert declaration.package.qualified_name == "abc"
        assert declaration.is_resolved
        assert declaration.supertypes == []

    def test_unresolved(self) -> None:
        assert not TypeDeclaration.unresolved("mod:Missing").is_resolved

    def test_inherited_flag(self) -> None:
        assert annotation_type("a.Tag", inherited=True).is_inherited
        assert not annotation_type("a.Tag", marked=True).is_inherited

    def test_satisfies_declaration_protocol(self) -> None:
        assert isinstance(type_decl("a.B"), Declaration)


class TestPackageDeclaration:
    def test_simple_name(self) -> None:
        assert PackageDeclaration("com.example").simple_name == "example"
