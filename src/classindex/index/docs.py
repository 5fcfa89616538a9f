"""Documentation sidecars for indexed types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from classindex.config.constants import DOCUMENTATION_PREFIX, INDEX_ENCODING
from classindex.core.logging import get_logger

if TYPE_CHECKING:
    from classindex.index.models import Declaration
    from classindex.index.resources import ResourceStore

log = get_logger("index.docs")


def documentation_path(qualified_name: str) -> str:
    return DOCUMENTATION_PREFIX + qualified_name


class DocumentationWriter:
    """Writes a type's doc comment verbatim, at most once per session."""

    def __init__(self, store: ResourceStore) -> None:
        self._store = store
        self._stored: set[str] = set()
        self._written: list[str] = []

    @property
    def stored(self) -> frozenset[str]:
        return frozenset(self._stored)

    @property
    def written(self) -> tuple[str, ...]:
        """Qualified names whose doc comment was written, in write order."""
        return tuple(self._written)

    def store(self, declaration: Declaration) -> bool:
        """Persist the doc comment of ``declaration``. Returns True if written.

        A declaration without a doc comment is still marked as handled.
        """
        name = declaration.qualified_name
        if name in self._stored:
            return False
        self._stored.add(name)

        doc = declaration.doc_comment
        if doc is None:
            return False

        path = documentation_path(name)
        with self._store.open_for_write(path) as sink:
            sink.write(doc.encode(INDEX_ENCODING))
        self._written.append(name)
        log.debug("documentation_written", type=name, path=path)
        return True

    def reset(self) -> None:
        self._stored.clear()
        self._written.clear()
