from __future__ import annotations

from pathlib import Path

import pytest

from ncx_nav.core.archive import MemoryArchiveStore, ZipArchiveStore
from ncx_nav.core.errors import PackageDocumentError
from ncx_nav.core.loader import NavigationLoader
from ncx_nav.core.package_reader import parse_version, read_package
from ncx_nav.models.package import EpubVersion
from tests.helpers import CONTAINER_XML, build_epub, nav_point, ncx, opf

NCX_BYTES = ncx(nav_point("p1", "Ch1", "text/ch1.xhtml"))


@pytest.mark.asyncio
async def test_read_package_from_zip(tmp_path: Path) -> None:
    epub = build_epub(tmp_path / "book.epub", NCX_BYTES)

    with ZipArchiveStore(epub) as archive:
        package = await read_package(archive)

    assert package.version == EpubVersion.EPUB2
    assert package.toc_id == "ncx"
    assert package.content_directory == "OEBPS"
    assert [(item.id, item.href) for item in package.manifest] == [
        ("ncx", "toc.ncx"),
        ("ch1", "text/ch1.xhtml"),
    ]
    assert package.manifest[0].media_type == "application/x-dtbncx+xml"


@pytest.mark.asyncio
async def test_read_package_without_spine_toc() -> None:
    archive = MemoryArchiveStore(
        {
            "META-INF/container.xml": CONTAINER_XML.format(
                opf_path="content.opf"
            ).encode(),
            "content.opf": opf(version="3.0", toc_id=None).encode(),
        }
    )

    package = await read_package(archive)

    assert package.version == EpubVersion.EPUB3
    assert package.toc_id is None
    assert package.content_directory == ""


@pytest.mark.asyncio
async def test_missing_container() -> None:
    archive = MemoryArchiveStore({"content.opf": opf().encode()})

    with pytest.raises(PackageDocumentError):
        await read_package(archive)


@pytest.mark.asyncio
async def test_missing_opf() -> None:
    archive = MemoryArchiveStore(
        {"META-INF/container.xml": CONTAINER_XML.format(opf_path="x.opf").encode()}
    )

    with pytest.raises(PackageDocumentError) as exc_info:
        await read_package(archive)

    assert "x.opf" in str(exc_info.value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2.0", EpubVersion.EPUB2),
        ("2.0.1", EpubVersion.EPUB2),
        ("3.0", EpubVersion.EPUB3),
    ],
)
def test_parse_version(value: str, expected: EpubVersion) -> None:
    assert parse_version(value) == expected


@pytest.mark.parametrize("value", [None, "", "1.0", "abc"])
def test_parse_version_rejects_unknown(value: str | None) -> None:
    with pytest.raises(PackageDocumentError):
        parse_version(value)


def test_loader_reads_epub(tmp_path: Path) -> None:
    epub = build_epub(tmp_path / "book.epub", NCX_BYTES)

    document = NavigationLoader(epub).load()

    assert document is not None
    assert document.nav_map.points[0].content.source == "text/ch1.xhtml"


def test_loader_epub3_without_ncx(tmp_path: Path) -> None:
    epub = build_epub(tmp_path / "book.epub", None, version="3.0", toc_id=None)

    assert NavigationLoader(epub).load() is None


def test_loader_reads_bare_ncx(tmp_path: Path) -> None:
    path = tmp_path / "toc.ncx"
    path.write_bytes(NCX_BYTES)

    document = NavigationLoader(path).load()

    assert document.nav_map.points[0].id == "p1"


def test_loader_rejects_unsupported(tmp_path: Path) -> None:
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF")

    with pytest.raises(ValueError):
        NavigationLoader(path)
    assert not NavigationLoader.is_supported(path)


def test_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        NavigationLoader(tmp_path / "missing.epub")


def test_loader_not_a_zip(tmp_path: Path) -> None:
    path = tmp_path / "book.epub"
    path.write_bytes(b"not a zip")

    with pytest.raises(PackageDocumentError):
        NavigationLoader(path).load()
