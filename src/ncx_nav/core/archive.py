"""Archive access for EPUB containers."""

import asyncio
import posixpath
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path


def combine_paths(directory: str | None, href: str) -> str:
    """Join a content directory with a manifest href inside the archive.

    An empty directory returns the href unchanged (apart from ``.``/``..``
    normalisation).
    """
    href = href.lstrip("/")
    path = posixpath.join(directory, href) if directory else href
    normalized = posixpath.normpath(path)
    return "" if normalized == "." else normalized


class ArchiveStore(ABC):
    """Read-only view over the named entries of an archive."""

    @abstractmethod
    def names(self) -> list[str]:
        """Entry names as stored."""
        pass

    @abstractmethod
    async def read(self, name: str) -> bytes:
        """Raw bytes of the entry with the exact stored name."""
        pass

    def find(self, path: str) -> str | None:
        """Stored entry name matching path case-insensitively, or None."""
        wanted = path.lower()
        for name in self.names():
            if name.lower() == wanted:
                return name
        return None


class MemoryArchiveStore(ArchiveStore):
    """Archive held entirely in memory."""

    def __init__(self, entries: dict[str, bytes]):
        self.entries = dict(entries)

    def names(self) -> list[str]:
        return list(self.entries)

    async def read(self, name: str) -> bytes:
        return self.entries[name]


class ZipArchiveStore(ArchiveStore):
    """Archive backed by a zip file on disk."""

    def __init__(self, path: Path):
        self.path = path
        self._zip = zipfile.ZipFile(path)

    def names(self) -> list[str]:
        return [info.filename for info in self._zip.infolist() if not info.is_dir()]

    async def read(self, name: str) -> bytes:
        return await asyncio.to_thread(self._zip.read, name)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipArchiveStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
