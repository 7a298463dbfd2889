"""Load navigation from a book file on disk (EPUB archive or bare NCX)."""

import asyncio
import zipfile
from pathlib import Path

from ncx_nav.core.archive import ZipArchiveStore
from ncx_nav.core.errors import PackageDocumentError
from ncx_nav.core.navigation_reader import parse_navigation_document, read_navigation
from ncx_nav.core.package_reader import read_package
from ncx_nav.models.navigation import NavigationDocument


class NavigationLoader:
    """Read the NCX navigation of an EPUB or a standalone .ncx file."""

    SUPPORTED_FORMATS = {
        ".epub": "epub",
        ".ncx": "ncx",
    }

    def __init__(self, path: Path):
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_FORMATS:
            supported = ", ".join(self.SUPPORTED_FORMATS.keys())
            raise ValueError(
                f"Unsupported format: {suffix}. Supported formats: {supported}"
            )

        self.path = path
        self.format = self.SUPPORTED_FORMATS[suffix]

    @classmethod
    def is_supported(cls, path: Path) -> bool:
        return path.suffix.lower() in cls.SUPPORTED_FORMATS

    async def read(self) -> NavigationDocument | None:
        """Parse the navigation; None for an EPUB 3 book without NCX."""
        if self.format == "ncx":
            data = await asyncio.to_thread(self.path.read_bytes)
            return parse_navigation_document(data)

        try:
            archive = ZipArchiveStore(self.path)
        except zipfile.BadZipFile as e:
            raise PackageDocumentError(
                f"EPUB parsing error: {self.path.name} is not a zip archive."
            ) from e

        with archive:
            package = await read_package(archive)
            return await read_navigation(archive, package)

    def load(self) -> NavigationDocument | None:
        """Blocking wrapper around read()."""
        return asyncio.run(self.read())
