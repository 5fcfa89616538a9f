"""Resource store abstraction over the build output.

Reads return an explicit ``ReadResult`` instead of raising, so callers can
tell a missing file from a store that cannot read at all and from a real I/O
failure. Writes replace a resource wholesale: readers never observe a
partially written resource.
"""

from __future__ import annotations

import io
import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Protocol

from classindex.core.errors import ResourceError


@dataclass(frozen=True, slots=True)
class Found:
    data: bytes


@dataclass(frozen=True, slots=True)
class NotFound:
    path: str


@dataclass(frozen=True, slots=True)
class Unsupported:
    path: str


@dataclass(frozen=True, slots=True)
class Failed:
    path: str
    cause: Exception


ReadResult = Found | NotFound | Unsupported | Failed


class ResourceStore(Protocol):
    """Build output location consumed by the indexer."""

    def open_for_read(self, path: str) -> ReadResult: ...

    def open_for_write(self, path: str) -> AbstractContextManager[BinaryIO]:
        """Byte sink that creates or truncates ``path`` when the block exits cleanly.

        Raises:
            ResourceError: If the resource cannot be written.
        """
        ...


def _relative(path: str) -> PurePosixPath:
    rel = PurePosixPath(path)
    if rel.is_absolute() or ".." in rel.parts or not rel.parts:
        raise ResourceError.write_failed([path], "resource path must be relative to the output root")
    return rel


def _file_mode(target: Path) -> int:
    """Permissions for a replacement file: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class FileSystemResourceStore:
    """Resources as files under a build output directory.

    With ``readable=False`` every read reports ``Unsupported``; the indexer
    then overwrites existing index files instead of merging them.
    """

    def __init__(self, root: Path, *, readable: bool = True) -> None:
        self.root = root
        self.readable = readable

    def resolve(self, path: str) -> Path:
        return self.root.joinpath(*_relative(path).parts)

    def open_for_read(self, path: str) -> ReadResult:
        if not self.readable:
            return Unsupported(path)
        try:
            return Found(self.resolve(path).read_bytes())
        except FileNotFoundError:
            return NotFound(path)
        except ResourceError as e:
            return Failed(path, e)
        except OSError as e:
            return Failed(path, ResourceError.read_failed(path, str(e)))

    @contextmanager
    def open_for_write(self, path: str) -> Iterator[BinaryIO]:
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.")
        except OSError as e:
            raise ResourceError.write_failed([path], str(e)) from e

        try:
            with os.fdopen(fd, "wb") as f:
                yield f
            # mkstemp creates 0600 files
            os.chmod(tmp_name, _file_mode(target))
            os.replace(tmp_name, target)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise ResourceError.write_failed([path], str(e)) from e
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MemoryResourceStore:
    """In-memory store, e.g. for embedding the indexer in another build tool."""

    def __init__(
        self, resources: dict[str, bytes] | None = None, *, readable: bool = True
    ) -> None:
        self.resources: dict[str, bytes] = dict(resources or {})
        self.readable = readable
        self.writes: list[str] = []

    def open_for_read(self, path: str) -> ReadResult:
        if not self.readable:
            return Unsupported(path)
        if path not in self.resources:
            return NotFound(path)
        return Found(self.resources[path])

    @contextmanager
    def open_for_write(self, path: str) -> Iterator[BinaryIO]:
        _relative(path)
        buffer = io.BytesIO()
        yield buffer
        self.resources[path] = buffer.getvalue()
        self.writes.append(path)

    def text(self, path: str) -> str:
        return self.resources[path].decode("utf-8")
