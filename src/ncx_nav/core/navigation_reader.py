"""NCX navigation document reader.

Locates the NCX file of an EPUB package inside its archive and parses it
into an immutable ``NavigationDocument``. Parsing is fail-fast: the first
missing element or attribute raises a ``NavigationError`` subclass and no
partial tree is returned.
"""

import logging

from lxml import etree

from ncx_nav.core.archive import ArchiveStore, combine_paths
from ncx_nav.core.errors import (
    ArchiveEntryNotFoundError,
    InsufficientChildrenError,
    InvalidEnumValueError,
    ManifestEntryNotFoundError,
    MissingRequiredAttributeError,
    MissingRequiredElementError,
    MissingTocIdentifierError,
)
from ncx_nav.core.xml_utils import (
    NCX_NAMESPACE,
    child_elements,
    find_element,
    find_elements,
    get_attributes,
    local_name,
    namespace_of,
    parse_xml,
    text_content,
)
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
from ncx_nav.models.package import EpubVersion, PackageInfo

log = logging.getLogger(__name__)


# =============================================================================
# Resource location
# =============================================================================


async def load_navigation_bytes(
    archive: ArchiveStore, package: PackageInfo
) -> bytes | None:
    """Return the raw NCX bytes for a package.

    Returns None for EPUB 3 packages that declare no NCX.

    Raises:
        MissingTocIdentifierError: EPUB 2 package without spine toc
        ManifestEntryNotFoundError: toc id not in the manifest
        ArchiveEntryNotFoundError: manifest href not in the archive
    """
    toc_id = package.toc_id
    if not toc_id:
        if package.version == EpubVersion.EPUB2:
            raise MissingTocIdentifierError()
        log.debug("EPUB 3 package without NCX")
        return None

    wanted = toc_id.lower()
    item = next((i for i in package.manifest if i.id.lower() == wanted), None)
    if item is None:
        raise ManifestEntryNotFoundError(toc_id)

    path = combine_paths(package.content_directory, item.href)
    entry_name = archive.find(path)
    if entry_name is None:
        raise ArchiveEntryNotFoundError(path)

    log.debug("Reading NCX %s (toc id %s)", entry_name, toc_id)
    return await archive.read(entry_name)


async def read_navigation(
    archive: ArchiveStore, package: PackageInfo
) -> NavigationDocument | None:
    """Locate and parse the NCX of a package."""
    data = await load_navigation_bytes(archive, package)
    if data is None:
        return None
    return parse_navigation_document(data)


# =============================================================================
# Document root
# =============================================================================


def parse_navigation_document(data: bytes) -> NavigationDocument:
    """Parse NCX bytes into a NavigationDocument.

    Raises:
        MalformedDocumentError: If the bytes are not well-formed XML.
        MissingRequiredElementError: If ncx, head, docTitle or navMap is absent.
        NavigationError: Any error raised by the nested element parsers.
    """
    root = parse_xml(data)

    ncx_node = find_element(root, "ncx", NCX_NAMESPACE, recursive=True)
    if ncx_node is None:
        raise MissingRequiredElementError("ncx")

    head_node = find_element(ncx_node, "head", NCX_NAMESPACE, recursive=True)
    if head_node is None:
        raise MissingRequiredElementError("head", "ncx")
    head = read_head(head_node)

    doc_title_node = find_element(ncx_node, "docTitle", NCX_NAMESPACE)
    if doc_title_node is None:
        raise MissingRequiredElementError("docTitle", "ncx")
    doc_title = read_doc_title(doc_title_node)

    doc_authors = tuple(
        read_doc_author(node)
        for node in find_elements(ncx_node, "docAuthor", NCX_NAMESPACE)
    )

    nav_map_node = find_element(ncx_node, "navMap", NCX_NAMESPACE)
    if nav_map_node is None:
        raise MissingRequiredElementError("navMap", "ncx")
    nav_map = read_navigation_map(nav_map_node)

    page_list_node = find_element(ncx_node, "pageList", NCX_NAMESPACE)
    page_list = read_page_list(page_list_node) if page_list_node is not None else None

    nav_lists = tuple(
        read_navigation_list(node)
        for node in find_elements(ncx_node, "navList", NCX_NAMESPACE)
    )

    log.debug(
        "Parsed NCX: %d meta, %d top-level points, %d page targets, %d nav lists",
        len(head),
        len(nav_map.points),
        len(page_list.targets) if page_list else 0,
        len(nav_lists),
    )
    return NavigationDocument(
        head=head,
        doc_title=doc_title,
        doc_authors=doc_authors,
        nav_map=nav_map,
        page_list=page_list,
        nav_lists=nav_lists,
    )


# =============================================================================
# Leaf fields
# =============================================================================


def read_head(head_node: etree._Element) -> tuple[HeadMeta, ...]:
    """Read the <meta> children of <head> in document order.

    Raises:
        MissingRequiredAttributeError: If a meta lacks name, or lacks content.
    """
    metadata = []
    for meta_node in child_elements(head_node):
        if local_name(meta_node).lower() != "meta":
            continue
        attributes = get_attributes(meta_node)
        name = attributes.get("name")
        if not name:
            raise MissingRequiredAttributeError("name", "meta")
        # Empty content is allowed, a missing attribute is not
        content = attributes.get("content")
        if content is None:
            raise MissingRequiredAttributeError("content", "meta", name)
        metadata.append(
            HeadMeta(name=name, content=content, scheme=attributes.get("scheme"))
        )
    return tuple(metadata)


def _read_texts(node: etree._Element) -> tuple[str, ...]:
    return tuple(
        text_content(child)
        for child in child_elements(node)
        if local_name(child).lower() == "text"
    )


def read_doc_title(doc_title_node: etree._Element) -> DocTitle:
    """Collect every <text> child of <docTitle>."""
    return DocTitle(titles=_read_texts(doc_title_node))


def read_doc_author(doc_author_node: etree._Element) -> DocAuthor:
    """Collect every <text> child of a <docAuthor>."""
    return DocAuthor(authors=_read_texts(doc_author_node))


def read_label(label_node: etree._Element) -> NavigationLabel:
    """Parse a <navLabel>; its <text> must share the label's namespace.

    Raises:
        MissingRequiredElementError: If the label has no <text>.
    """
    text_node = find_element(label_node, "text", namespace_of(label_node))
    if text_node is None:
        raise MissingRequiredElementError("text", "navLabel")
    return NavigationLabel(text=text_content(text_node))


def read_content(content_node: etree._Element) -> NavigationContent:
    """Parse a <content>; raises MissingRequiredAttributeError without src."""
    attributes = get_attributes(content_node)
    source = attributes.get("src")
    if not source:
        raise MissingRequiredAttributeError("src", "content")
    return NavigationContent(id=attributes.get("id"), source=source)


# =============================================================================
# Navigation points
# =============================================================================


class _PointFrame:
    """In-progress navigation point while its children are being read."""

    def __init__(self, node: etree._Element):
        attributes = get_attributes(node)
        self.id = attributes.get("id")
        if not self.id:
            raise MissingRequiredAttributeError("id", "navPoint")
        self.class_name = attributes.get("class")
        self.play_order = attributes.get("playorder")
        self.labels: list[NavigationLabel] = []
        self.content: NavigationContent | None = None
        self.children: list[NavigationPoint] = []
        self.pending = child_elements(node)

    def build(self) -> NavigationPoint:
        if not self.labels:
            raise InsufficientChildrenError("navLabel", "navPoint", self.id)
        if self.content is None:
            raise MissingRequiredElementError("content", f"navPoint {self.id}")
        return NavigationPoint(
            id=self.id,
            class_name=self.class_name,
            play_order=self.play_order,
            labels=tuple(self.labels),
            content=self.content,
            children=tuple(self.children),
        )


def read_navigation_point(point_node: etree._Element) -> NavigationPoint:
    """Parse a <navPoint> and all nested points.

    Walks the subtree depth-first with an explicit stack, so nesting depth
    is not bounded by the interpreter recursion limit. Validation happens in
    the same order as plain recursive descent: a point's id is checked when
    it is entered, its labels and content after all of its children.
    """
    stack = [_PointFrame(point_node)]
    while True:
        frame = stack[-1]
        child = next(frame.pending, None)
        if child is None:
            point = frame.build()
            stack.pop()
            if not stack:
                return point
            stack[-1].children.append(point)
            continue

        name = local_name(child).lower()
        if name == "navlabel":
            frame.labels.append(read_label(child))
        elif name == "content":
            frame.content = read_content(child)
        elif name == "navpoint":
            stack.append(_PointFrame(child))


def read_navigation_map(nav_map_node: etree._Element) -> NavigationMap:
    """Parse the top-level navPoints of <navMap>.

    Errors propagate from read_navigation_point.
    """
    points = tuple(
        read_navigation_point(node)
        for node in child_elements(nav_map_node)
        if local_name(node).lower() == "navpoint"
    )
    return NavigationMap(points=points)


# =============================================================================
# Page list
# =============================================================================


def read_page_list(page_list_node: etree._Element) -> PageList:
    """Parse a <pageList>; errors come from read_page_target."""
    # pageTarget is matched with exact case, unlike every other element
    targets = tuple(
        read_page_target(node)
        for node in child_elements(page_list_node)
        if local_name(node) == "pageTarget"
    )
    return PageList(targets=targets)


def read_page_target(page_target_node: etree._Element) -> PageTarget:
    """Parse a <pageTarget>.

    Raises:
        InvalidEnumValueError: If type is missing or not front, normal or special.
        InsufficientChildrenError: If the target has no <navLabel>.
        MissingRequiredAttributeError: If its <content> lacks src.
    """
    attributes = get_attributes(page_target_node)
    raw_type = attributes.get("type")
    target_type = PageTargetType.from_string(raw_type)
    if target_type == PageTargetType.UNDEFINED:
        raise InvalidEnumValueError("type", "pageTarget", raw_type)

    labels, content = _read_labels_and_content(page_target_node)
    if not labels:
        raise InsufficientChildrenError(
            "navLabel", "pageTarget", attributes.get("id")
        )

    return PageTarget(
        id=attributes.get("id"),
        value=attributes.get("value"),
        type=target_type,
        class_name=attributes.get("class"),
        play_order=attributes.get("playorder"),
        labels=labels,
        content=content,
    )


def _read_labels_and_content(
    node: etree._Element,
) -> tuple[tuple[NavigationLabel, ...], NavigationContent | None]:
    """Collect <navLabel> children and the last <content> child."""
    labels = []
    content = None
    for child in child_elements(node):
        name = local_name(child).lower()
        if name == "navlabel":
            labels.append(read_label(child))
        elif name == "content":
            content = read_content(child)
    return tuple(labels), content


# =============================================================================
# Navigation lists
# =============================================================================


def read_navigation_list(nav_list_node: etree._Element) -> NavigationList:
    """Parse a <navList> and its navTargets.

    Raises:
        InsufficientChildrenError: If the list has no <navLabel>.
        NavigationError: Any error raised by read_navigation_target.
    """
    attributes = get_attributes(nav_list_node)
    labels = []
    targets = []
    for child in child_elements(nav_list_node):
        name = local_name(child).lower()
        if name == "navlabel":
            labels.append(read_label(child))
        elif name == "navtarget":
            targets.append(read_navigation_target(child))

    if not labels:
        raise InsufficientChildrenError("navLabel", "navList", attributes.get("id"))

    return NavigationList(
        id=attributes.get("id"),
        class_name=attributes.get("class"),
        labels=tuple(labels),
        targets=tuple(targets),
    )


def read_navigation_target(nav_target_node: etree._Element) -> NavigationTarget:
    """Parse a <navTarget>.

    Raises:
        MissingRequiredAttributeError: If id is missing, or its <content> lacks src.
        InsufficientChildrenError: If the target has no <navLabel>.
    """
    attributes = get_attributes(nav_target_node)
    target_id = attributes.get("id")
    if not target_id:
        raise MissingRequiredAttributeError("id", "navTarget")

    labels, content = _read_labels_and_content(nav_target_node)
    if not labels:
        raise InsufficientChildrenError("navLabel", "navTarget", target_id)

    return NavigationTarget(
        id=target_id,
        value=attributes.get("value"),
        class_name=attributes.get("class"),
        play_order=attributes.get("playorder"),
        labels=labels,
        content=content,
    )
