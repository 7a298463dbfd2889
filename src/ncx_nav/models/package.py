"""Data models for the parts of the OPF package the navigation reader needs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EpubVersion(str, Enum):
    """Package format version."""

    EPUB2 = "epub2"
    EPUB3 = "epub3"


class ManifestItem(BaseModel):
    """Single manifest entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    href: str
    media_type: str | None = None


class PackageInfo(BaseModel):
    """Package metadata consumed when locating the NCX."""

    model_config = ConfigDict(frozen=True)

    version: EpubVersion
    toc_id: str | None = None  # spine@toc
    manifest: tuple[ManifestItem, ...] = Field(default_factory=tuple)
    content_directory: str = ""  # directory of the OPF inside the archive
