"""Data models."""

from ncx_nav.models.navigation import (
    DocAuthor,
    DocTitle,
    HeadMeta,
    NavigationContent,
    NavigationDocument,
    NavigationLabel,
    NavigationList,
    NavigationMap,
    NavigationPoint,
    NavigationTarget,
    PageList,
    PageTarget,
    PageTargetType,
)
from ncx_nav.models.package import (
    EpubVersion,
    ManifestItem,
    PackageInfo,
)

__all__ = [
    # Navigation models
    "NavigationDocument",
    "HeadMeta",
    "DocTitle",
    "DocAuthor",
    "NavigationLabel",
    "NavigationContent",
    "NavigationMap",
    "NavigationPoint",
    "PageList",
    "PageTarget",
    "PageTargetType",
    "NavigationList",
    "NavigationTarget",
    # Package models
    "EpubVersion",
    "ManifestItem",
    "PackageInfo",
]
