"""Namespace-aware, case-insensitive element lookup on top of lxml."""

from collections.abc import Iterator

from lxml import etree

from ncx_nav.core.errors import MalformedDocumentError

NCX_NAMESPACE = "http://www.daisy.org/z3986/2005/ncx/"


def parse_xml(data: bytes) -> etree._Element:
    """Parse UTF-8 bytes into the root element."""
    parser = etree.XMLParser(
        encoding="utf-8",
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        huge_tree=True,  # navPoint nesting is unbounded; default limit is 256
    )
    try:
        return etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(str(e)) from e


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def namespace_of(element: etree._Element) -> str | None:
    return etree.QName(element).namespace


def child_elements(element: etree._Element) -> Iterator[etree._Element]:
    """Direct element children in document order (skips comments and PIs)."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def _matches(element: etree._Element, name: str, namespace: str | None) -> bool:
    if not isinstance(element.tag, str):
        return False
    qname = etree.QName(element)
    if qname.localname.lower() != name:
        return False
    # Documents without a namespace declaration are accepted as-is
    return namespace is None or qname.namespace in (namespace, None)


def find_elements(
    element: etree._Element,
    name: str,
    namespace: str | None = NCX_NAMESPACE,
    recursive: bool = False,
) -> list[etree._Element]:
    """Find child (or descendant) elements by local name, case-insensitively.

    Args:
        element: Element to search under
        name: Local element name, compared ignoring case
        namespace: Expected namespace; None matches any namespace
        recursive: Search all descendants, including the element itself

    Returns:
        Matching elements in document order
    """
    name = name.lower()
    candidates = element.iter() if recursive else child_elements(element)
    return [el for el in candidates if _matches(el, name, namespace)]


def find_element(
    element: etree._Element,
    name: str,
    namespace: str | None = NCX_NAMESPACE,
    recursive: bool = False,
) -> etree._Element | None:
    """First match of find_elements, or None."""
    name = name.lower()
    candidates = element.iter() if recursive else child_elements(element)
    for el in candidates:
        if _matches(el, name, namespace):
            return el
    return None


def get_attributes(element: etree._Element) -> dict[str, str]:
    """Attributes keyed by lower-cased local name; later duplicates win."""
    return {
        etree.QName(key).localname.lower(): value
        for key, value in element.attrib.items()
    }


def text_content(element: etree._Element) -> str:
    """Concatenated text of the element and all its descendants."""
    return "".join(element.itertext())
