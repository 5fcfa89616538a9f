"""Python source adapter: discovers modules and builds declarations for the indexer."""

from classindex.source.discovery import ModuleSource, discover_modules
from classindex.source.extraction import DeclarationBuilder, parse_module
from classindex.source.scanner import Round, SourceScanner

__all__ = [
    "DeclarationBuilder",
    "ModuleSource",
    "Round",
    "SourceScanner",
    "discover_modules",
    "parse_module",
]
