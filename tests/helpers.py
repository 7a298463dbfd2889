from __future__ import annotations

import zipfile
from pathlib import Path

NCX_NS = "http://www.daisy.org/z3986/2005/ncx/"

DEFAULT_HEAD = '<head><meta name="dtb:uid" content="urn:uuid:1"/></head>'
DEFAULT_TITLE = "<docTitle><text>Book</text></docTitle>"


def nav_point(
    point_id: str,
    label: str,
    src: str,
    children: str = "",
    extra: str = "",
) -> str:
    return (
        f'<navPoint id="{point_id}"{extra}>'
        f"<navLabel><text>{label}</text></navLabel>"
        f'<content src="{src}"/>'
        f"{children}"
        "</navPoint>"
    )


def ncx(
    nav_map: str,
    *,
    head: str = DEFAULT_HEAD,
    title: str = DEFAULT_TITLE,
    extra: str = "",
    namespace: bool = True,
) -> bytes:
    """Build NCX bytes with the given navMap body and trailing blocks."""
    xmlns = f' xmlns="{NCX_NS}"' if namespace else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<ncx{xmlns} version="2005-1">'
        f"{head}{title}<navMap>{nav_map}</navMap>{extra}"
        "</ncx>"
    ).encode("utf-8")


def nested_points(depth: int, prefix: str = "p") -> str:
    """A single chain of navPoints nested depth levels deep."""
    body = ""
    for level in range(depth, 0, -1):
        body = nav_point(
            f"{prefix}{level}", f"Level {level}", f"ch{level}.xhtml", body
        )
    return body


CONTAINER_XML = (
    '<?xml version="1.0"?>'
    '<container version="1.0" '
    'xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
    "<rootfiles>"
    '<rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>'
    "</rootfiles>"
    "</container>"
)


def opf(
    version: str = "2.0",
    toc_id: str | None = "ncx",
    ncx_href: str = "toc.ncx",
) -> str:
    toc_attr = f' toc="{toc_id}"' if toc_id else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<package xmlns="http://www.idpf.org/2007/opf" version="{version}">'
        "<manifest>"
        f'<item id="ncx" href="{ncx_href}" media-type="application/x-dtbncx+xml"/>'
        '<item id="ch1" href="text/ch1.xhtml" media-type="application/xhtml+xml"/>'
        "</manifest>"
        f'<spine{toc_attr}><itemref idref="ch1"/></spine>'
        "</package>"
    )


def build_epub(
    path: Path,
    ncx_bytes: bytes | None,
    *,
    version: str = "2.0",
    toc_id: str | None = "ncx",
    ncx_href: str = "toc.ncx",
    ncx_entry: str = "OEBPS/toc.ncx",
    opf_path: str = "OEBPS/content.opf",
) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip")
        container = CONTAINER_XML.format(opf_path=opf_path)
        archive.writestr("META-INF/container.xml", container)
        archive.writestr(opf_path, opf(version, toc_id, ncx_href))
        if ncx_bytes is not None:
            archive.writestr(ncx_entry, ncx_bytes)
        archive.writestr("OEBPS/text/ch1.xhtml", "<html><body>Ch1</body></html>")
    return path
