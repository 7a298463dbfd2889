"""Data models for the NCX navigation document."""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict


class PageTargetType(str, Enum):
    """Kind of page a page target points at."""

    FRONT = "front"
    NORMAL = "normal"
    SPECIAL = "special"
    UNDEFINED = "undefined"

    @classmethod
    def from_string(cls, value: str | None) -> "PageTargetType":
        """Map an attribute value to a member, case-insensitively.

        Unknown, empty or missing values map to UNDEFINED.
        """
        if not value:
            return cls.UNDEFINED
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNDEFINED


class NavigationModel(BaseModel):
    """Base for all navigation models: immutable once built."""

    model_config = ConfigDict(frozen=True)


class HeadMeta(NavigationModel):
    """Single <meta> entry from the NCX head."""

    name: str
    content: str
    scheme: str | None = None


class DocTitle(NavigationModel):
    titles: tuple[str, ...] = ()


class DocAuthor(NavigationModel):
    authors: tuple[str, ...] = ()


class NavigationLabel(NavigationModel):
    text: str


class NavigationContent(NavigationModel):
    """Content reference, usually a relative path with optional fragment."""

    id: str | None = None
    source: str


class NavigationPoint(NavigationModel):
    """Table of contents entry with its nested child points."""

    id: str
    class_name: str | None = None
    play_order: str | None = None
    labels: tuple[NavigationLabel, ...]
    content: NavigationContent
    children: tuple["NavigationPoint", ...] = ()

    @property
    def label(self) -> str:
        """Text of the first label."""
        return self.labels[0].text

    def iter_points(self, depth: int = 1) -> Iterator[tuple[int, "NavigationPoint"]]:
        """Yield (depth, point) for this point and its descendants, depth-first."""
        stack = [(depth, self)]
        while stack:
            level, point = stack.pop()
            yield level, point
            stack.extend((level + 1, child) for child in reversed(point.children))

    def to_dict(self) -> dict:
        """JSON-ready dict of this point and its subtree.

        Children are walked with an explicit stack: pydantic serialisation
        stops at a few hundred levels of self-nesting.
        """
        root = self.model_dump(mode="json", exclude={"children"})
        root["children"] = []
        stack = [(root, self)]
        while stack:
            data, point = stack.pop()
            for child in point.children:
                child_data = child.model_dump(mode="json", exclude={"children"})
                child_data["children"] = []
                data["children"].append(child_data)
                stack.append((child_data, child))
        return root


class NavigationMap(NavigationModel):
    points: tuple[NavigationPoint, ...] = ()


class PageTarget(NavigationModel):
    """Print page mapping entry."""

    id: str | None = None
    value: str | None = None
    type: PageTargetType
    class_name: str | None = None
    play_order: str | None = None
    labels: tuple[NavigationLabel, ...]
    content: NavigationContent | None = None


class PageList(NavigationModel):
    targets: tuple[PageTarget, ...] = ()


class NavigationTarget(NavigationModel):
    """Entry of an auxiliary navigation list (figures, tables, ...)."""

    id: str
    value: str | None = None
    class_name: str | None = None
    play_order: str | None = None
    labels: tuple[NavigationLabel, ...]
    content: NavigationContent | None = None


class NavigationList(NavigationModel):
    id: str | None = None
    class_name: str | None = None
    labels: tuple[NavigationLabel, ...]
    targets: tuple[NavigationTarget, ...] = ()


class NavigationDocument(NavigationModel):
    """Complete parsed NCX document."""

    head: tuple[HeadMeta, ...] = ()
    doc_title: DocTitle
    doc_authors: tuple[DocAuthor, ...] = ()
    nav_map: NavigationMap
    page_list: PageList | None = None
    nav_lists: tuple[NavigationList, ...] = ()

    @property
    def title(self) -> str | None:
        """First document title, if any."""
        return self.doc_title.titles[0] if self.doc_title.titles else None

    @property
    def authors(self) -> list[str]:
        """All author names across every docAuthor block."""
        return [name for author in self.doc_authors for name in author.authors]

    @property
    def depth(self) -> int:
        """Maximum nesting depth of the navigation map (0 when empty)."""
        return max((depth for depth, _ in self.iter_points()), default=0)

    def iter_points(self) -> Iterator[tuple[int, NavigationPoint]]:
        """Walk every navigation point in document order with its depth."""
        for point in self.nav_map.points:
            yield from point.iter_points()

    def to_dict(self) -> dict:
        """JSON-ready dict of the whole document, safe for any nesting depth."""
        data = self.model_dump(mode="json", exclude={"nav_map"})
        points = [point.to_dict() for point in self.nav_map.points]
        data["nav_map"] = {"points": points}
        return {name: data[name] for name in type(self).model_fields}

    def meta(self, name: str) -> str | None:
        """Look up a head meta content by name, case-insensitively."""
        wanted = name.lower()
        for entry in self.head:
            if entry.name.lower() == wanted:
                return entry.content
        return None
