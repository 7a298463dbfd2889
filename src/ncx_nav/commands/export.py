"""Export command implementation."""

import json
from collections.abc import Iterator
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ncx_nav.core.loader import NavigationLoader


def get_default_output_path(book_path: Path) -> Path:
    """Default JSON path next to the book: {book_name}_navigation.json."""
    return book_path.parent / f"{book_path.stem}_navigation.json"


def iter_json(value: object, indent: int = 2) -> Iterator[str]:
    """Yield chunks of indented JSON for nested dicts and lists.

    Produces the same text as ``json.dumps(value, indent=indent)`` but walks
    containers with an explicit stack, so nesting depth is not bounded by the
    interpreter recursion limit.
    """
    # Pending work: literal text, or a (value, level) pair still to encode
    stack: list[str | tuple[object, int]] = [(value, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            yield item
            continue

        current, level = item
        if isinstance(current, dict) and current:
            entries = [(json.dumps(str(k)) + ": ", v) for k, v in current.items()]
            opening, closing = "{", "}"
        elif isinstance(current, (list, tuple)) and current:
            entries = [("", v) for v in current]
            opening, closing = "[", "]"
        else:
            yield json.dumps(current)
            continue

        inner = "\n" + " " * (indent * (level + 1))
        parts: list[str | tuple[object, int]] = []
        for i, (prefix, child) in enumerate(entries):
            parts.append(("," if i else "") + inner + prefix)
            parts.append((child, level + 1))
        parts.append("\n" + " " * (indent * level) + closing)

        yield opening
        stack.extend(reversed(parts))


def execute_export(
    book_path: Path,
    output_file: Path | None,
    quiet: bool,
    console: Console,
) -> Path | None:
    """Write the parsed navigation document as JSON.

    Returns the output path, or None when the book has no NCX.
    """
    document = NavigationLoader(book_path).load()
    if document is None:
        console.print("[yellow]EPUB 3 book without an NCX navigation document.[/]")
        return None

    output_path = output_file or get_default_output_path(book_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.writelines(iter_json(document.to_dict()))

    if not quiet:
        point_count = sum(1 for _ in document.iter_points())
        console.print(
            f"[green]Exported {point_count} navigation point(s) to "
            f"{escape(str(output_path))}[/]"
        )
    return output_path
