"""Errors raised while locating and parsing navigation documents."""


class NavigationError(Exception):
    """Base class for every navigation parsing failure."""


class MissingTocIdentifierError(NavigationError):
    """EPUB 2 package has no spine toc attribute."""

    def __init__(self) -> None:
        super().__init__("EPUB parsing error: TOC ID is empty.")


class ManifestEntryNotFoundError(NavigationError):
    """The TOC id does not match any manifest item."""

    def __init__(self, toc_id: str):
        self.toc_id = toc_id
        super().__init__(
            f"EPUB parsing error: TOC item {toc_id} not found in EPUB manifest."
        )


class ArchiveEntryNotFoundError(NavigationError):
    """The resolved TOC path does not exist in the archive."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"EPUB parsing error: TOC file {path} not found in archive."
        )


class MalformedDocumentError(NavigationError):
    """The navigation bytes are not well-formed XML."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"EPUB parsing error: TOC file is not valid XML: {reason}")


class MissingRequiredElementError(NavigationError):
    """A mandatory element is absent."""

    def __init__(self, element: str, owner: str | None = None):
        self.element = element
        self.owner = owner
        where = f" in {owner}" if owner else ""
        super().__init__(
            f"EPUB parsing error: required element {element} is missing{where}."
        )


class MissingRequiredAttributeError(NavigationError):
    """A mandatory attribute is absent, or empty where a value is required."""

    def __init__(self, attribute: str, element: str, owner: str | None = None):
        self.attribute = attribute
        self.element = element
        self.owner = owner
        where = f" ({owner})" if owner else ""
        super().__init__(
            f"EPUB parsing error: {element}{where} attribute {attribute} is missing."
        )


class InvalidEnumValueError(NavigationError):
    """An attribute value does not map to a known enumeration member."""

    def __init__(self, attribute: str, element: str, value: str | None):
        self.attribute = attribute
        self.element = element
        self.value = value
        super().__init__(
            f"EPUB parsing error: {element} attribute {attribute} has invalid "
            f"value {value!r}."
        )


class InsufficientChildrenError(NavigationError):
    """A container has fewer children of a kind than required."""

    def __init__(self, child: str, element: str, owner: str | None = None):
        self.child = child
        self.element = element
        self.owner = owner
        where = f" {owner}" if owner else ""
        super().__init__(
            f"EPUB parsing error: {element}{where} should contain at least one "
            f"{child} element."
        )


class PackageDocumentError(NavigationError):
    """The container or OPF package document cannot be read."""
