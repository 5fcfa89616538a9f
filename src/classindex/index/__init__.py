"""Indexing engine: registry, traversal, index file merging and doc sidecars."""

from classindex.index.docs import DocumentationWriter
from classindex.index.engine import ClassIndexer
from classindex.index.models import (
    Annotation,
    Declaration,
    DeclarationKind,
    IndexKind,
    PackageDeclaration,
    TypeDeclaration,
)
from classindex.index.registry import IndexRegistry, MarkerMatch
from classindex.index.resources import (
    FileSystemResourceStore,
    MemoryResourceStore,
    ReadResult,
    ResourceStore,
)
from classindex.index.writer import IndexWriter, WriteReport, index_path

__all__ = [
    "Annotation",
    "ClassIndexer",
    "Declaration",
    "DeclarationKind",
    "DocumentationWriter",
    "FileSystemResourceStore",
    "IndexKind",
    "IndexRegistry",
    "IndexWriter",
    "MarkerMatch",
    "MemoryResourceStore",
    "PackageDeclaration",
    "ReadResult",
    "ResourceStore",
    "TypeDeclaration",
    "WriteReport",
    "index_path",
]
