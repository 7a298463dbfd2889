"""Minimal OPF package reader: just what the navigation reader consumes."""

import logging
import posixpath

from ncx_nav.core.archive import ArchiveStore
from ncx_nav.core.errors import PackageDocumentError
from ncx_nav.core.xml_utils import (
    find_element,
    find_elements,
    get_attributes,
    parse_xml,
)
from ncx_nav.models.package import EpubVersion, ManifestItem, PackageInfo

log = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
CONTAINER_NAMESPACE = "urn:oasis:names:tc:opendocument:xmlns:container"
OPF_NAMESPACE = "http://www.idpf.org/2007/opf"


async def read_root_file_path(archive: ArchiveStore) -> str:
    """Path of the first rootfile listed in META-INF/container.xml."""
    entry_name = archive.find(CONTAINER_PATH)
    if entry_name is None:
        raise PackageDocumentError(
            f"EPUB parsing error: {CONTAINER_PATH} not found in archive."
        )

    root = parse_xml(await archive.read(entry_name))
    root_file = find_element(root, "rootfile", CONTAINER_NAMESPACE, recursive=True)
    full_path = None
    if root_file is not None:
        full_path = get_attributes(root_file).get("full-path")
    if not full_path:
        raise PackageDocumentError(
            "EPUB parsing error: container.xml does not declare a root file."
        )
    return full_path


def parse_version(value: str | None) -> EpubVersion:
    """Map the package version attribute ("2.0", "3.0", ...) to EpubVersion."""
    major = (value or "").strip().split(".")[0]
    if major == "2":
        return EpubVersion.EPUB2
    if major == "3":
        return EpubVersion.EPUB3
    raise PackageDocumentError(f"EPUB parsing error: unsupported version {value!r}.")


def parse_package_document(data: bytes, root_file_path: str) -> PackageInfo:
    root = parse_xml(data)
    package_node = find_element(root, "package", OPF_NAMESPACE, recursive=True)
    if package_node is None:
        raise PackageDocumentError(
            "EPUB parsing error: OPF file does not contain package element."
        )
    version = parse_version(get_attributes(package_node).get("version"))

    manifest = []
    manifest_node = find_element(package_node, "manifest", OPF_NAMESPACE)
    if manifest_node is not None:
        for item_node in find_elements(manifest_node, "item", OPF_NAMESPACE):
            attributes = get_attributes(item_node)
            item_id = attributes.get("id")
            href = attributes.get("href")
            if not item_id or not href:
                # Items without id/href can never be the NCX
                continue
            manifest.append(
                ManifestItem(
                    id=item_id,
                    href=href,
                    media_type=attributes.get("media-type"),
                )
            )

    spine_node = find_element(package_node, "spine", OPF_NAMESPACE)
    toc_id = get_attributes(spine_node).get("toc") if spine_node is not None else None

    return PackageInfo(
        version=version,
        toc_id=toc_id,
        manifest=tuple(manifest),
        content_directory=posixpath.dirname(root_file_path),
    )


async def read_package(archive: ArchiveStore) -> PackageInfo:
    """Read the package metadata of an EPUB archive."""
    root_file_path = await read_root_file_path(archive)
    entry_name = archive.find(root_file_path)
    if entry_name is None:
        raise PackageDocumentError(
            f"EPUB parsing error: OPF file {root_file_path} not found in archive."
        )

    package = parse_package_document(await archive.read(entry_name), root_file_path)
    log.debug(
        "Package %s: %s, toc=%s, %d manifest items",
        root_file_path,
        package.version.value,
        package.toc_id,
        len(package.manifest),
    )
    return package
