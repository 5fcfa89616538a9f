"""Merge and write index files at the end of an indexing session.

Each key's file is read back (if the store can read it), unioned with the
members found in this session and rewritten whole. Keys are independent:
a failed write is reported after every other key has been attempted.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from classindex.config.constants import (
    ANNOTATED_INDEX_PREFIX,
    INDEX_ENCODING,
    PACKAGE_INDEX_NAME,
    SUBCLASS_INDEX_PREFIX,
)
from classindex.core.errors import ResourceError
from classindex.core.logging import get_logger
from classindex.index.models import IndexKind
from classindex.index.resources import Failed, NotFound, Unsupported

if TYPE_CHECKING:
    from classindex.index.resources import ResourceStore

log = get_logger("index.writer")


def index_path(kind: IndexKind, key: str) -> str:
    """Resource path of the index file for ``key``."""
    if kind is IndexKind.ANNOTATED:
        return ANNOTATED_INDEX_PREFIX + key
    if kind is IndexKind.SUBCLASS:
        return SUBCLASS_INDEX_PREFIX + key
    if not key:
        return PACKAGE_INDEX_NAME
    return key.replace(".", "/") + "/" + PACKAGE_INDEX_NAME


def parse_entries(data: bytes) -> set[str]:
    """Entries of an index file; blank lines are ignored."""
    text = data.decode(INDEX_ENCODING)
    return {line.strip() for line in text.splitlines() if line.strip()}


def format_entries(entries: Iterable[str]) -> bytes:
    return "".join(f"{entry}\n" for entry in sorted(entries)).encode(INDEX_ENCODING)


@dataclass
class WriteReport:
    """What finalize wrote: resource path -> number of entries, per kind."""

    written: dict[IndexKind, dict[str, int]] = field(
        default_factory=lambda: {kind: {} for kind in IndexKind}
    )
    failed: list[str] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return sum(len(paths) for paths in self.written.values())


class IndexWriter:
    """Writes membership mappings to index files, merging prior contents."""

    def __init__(self, store: ResourceStore) -> None:
        self._store = store

    def read_existing(self, path: str) -> set[str]:
        """Prior entries of ``path``; empty if missing, unreadable or unsupported."""
        result = self._store.open_for_read(path)
        if isinstance(result, NotFound | Unsupported):
            return set()
        if isinstance(result, Failed):
            log.warning("index_read_failed", path=path, error=str(result.cause))
            return set()
        try:
            return parse_entries(result.data)
        except UnicodeDecodeError as e:
            log.warning("index_read_failed", path=path, error=str(e))
            return set()

    def write_index(self, path: str, members: Iterable[str]) -> int:
        """Write the union of ``members`` and the existing entries of ``path``."""
        entries = set(members)
        entries |= self.read_existing(path)
        with self._store.open_for_write(path) as sink:
            sink.write(format_entries(entries))
        return len(entries)

    def write_all(self, memberships: Mapping[IndexKind, Mapping[str, set[str]]]) -> WriteReport:
        """Write every non-empty key of every kind.

        Raises:
            ResourceError: After all keys were attempted, if any write failed.
        """
        report = WriteReport()
        errors: list[ResourceError] = []
        for kind in IndexKind:
            for key, members in memberships.get(kind, {}).items():
                if not members:
                    continue
                path = index_path(kind, key)
                try:
                    count = self.write_index(path, members)
                except ResourceError as e:
                    log.error("index_write_failed", path=path, error=str(e))
                    report.failed.append(path)
                    errors.append(e)
                    continue
                report.written[kind][path] = count
                log.info("index_written", kind=kind.value, key=key, path=path, entries=count)

        if errors:
            raise ResourceError.write_failed(report.failed, errors[0].message)
        return report
