"""Host pipeline for Python sources: delivers declarations round by round."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from classindex.core.logging import get_logger
from classindex.index.models import TypeDeclaration
from classindex.source.discovery import ModuleSource, discover_modules
from classindex.source.extraction import DeclarationBuilder, parse_module

log = get_logger("source.scanner")


@dataclass(frozen=True)
class Round:
    """One batch of newly seen top-level declarations."""

    declarations: tuple[TypeDeclaration, ...]
    processing_over: bool = False
    module: str | None = None


class SourceScanner:
    """Scans source roots and yields one round per module plus a final empty round."""

    def __init__(self, roots: list[Path]) -> None:
        self.roots = roots
        self._modules: list[ModuleSource] | None = None

    @property
    def modules(self) -> list[ModuleSource]:
        if self._modules is None:
            self._modules = discover_modules(self.roots)
        return self._modules

    def rounds(self) -> Iterator[Round]:
        """Parse every module, then yield its classes as one round.

        Raises:
            IndexingError: If a module cannot be parsed.
        """
        parsed = [parse_module(module) for module in self.modules]
        roots = DeclarationBuilder(parsed).build()
        log.info("sources_scanned", modules=len(parsed), roots=[str(r) for r in self.roots])

        for module_name, declarations in roots.items():
            if declarations:
                yield Round(tuple(declarations), module=module_name)
        yield Round((), processing_over=True)
