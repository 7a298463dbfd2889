"""Toc command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from ncx_nav.core.loader import NavigationLoader
from ncx_nav.models.navigation import NavigationDocument, NavigationPoint


def build_info_lines(
    document: NavigationDocument, loader: NavigationLoader
) -> list[str]:
    """Summary lines for the book information panel."""
    point_count = sum(1 for _ in document.iter_points())
    page_count = len(document.page_list.targets) if document.page_list else 0

    return [
        f"[bold]{escape(document.title or 'Untitled')}[/]",
        "",
        f"[dim]Author(s):[/] {escape(', '.join(document.authors) or 'Unknown')}",
        f"[dim]Identifier:[/] {escape(document.meta('dtb:uid') or 'Unknown')}",
        f"[dim]Source:[/] {loader.format.upper()}",
        f"[dim]Navigation points:[/] {point_count} (depth {document.depth})",
        f"[dim]Page targets:[/] {page_count}",
        f"[dim]Navigation lists:[/] {len(document.nav_lists)}",
    ]


def build_toc_tree(document: NavigationDocument) -> Tree:
    """Render the navigation map as a rich tree."""
    tree = Tree("[bold cyan]Table of Contents[/]")
    # (tree node, point) pairs; children are added in document order
    pending: list[tuple[Tree, NavigationPoint]] = [
        (tree, point) for point in reversed(document.nav_map.points)
    ]
    while pending:
        parent, point = pending.pop()
        node = parent.add(
            f"{escape(point.label)} [dim]{escape(point.content.source)}[/]"
        )
        pending.extend((node, child) for child in reversed(point.children))
    return tree


def build_page_table(document: NavigationDocument) -> Table:
    table = Table(title="Page List", show_header=True, header_style="bold cyan")
    table.add_column("Page", style="white")
    table.add_column("Type", style="dim")
    table.add_column("Target", style="green")

    if document.page_list:
        for target in document.page_list.targets:
            table.add_row(
                escape(target.labels[0].text),
                target.type.value,
                escape(target.content.source) if target.content else "-",
            )
    return table


def build_list_tables(document: NavigationDocument) -> list[Table]:
    tables = []
    for nav_list in document.nav_lists:
        table = Table(
            title=escape(nav_list.labels[0].text),
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Label", style="white")
        table.add_column("Target", style="green")
        for i, target in enumerate(nav_list.targets):
            table.add_row(
                str(i + 1),
                escape(target.labels[0].text),
                escape(target.content.source) if target.content else "-",
            )
        tables.append(table)
    return tables


def execute_toc(
    book_path: Path,
    show_pages: bool,
    show_lists: bool,
    console: Console,
) -> None:
    """Execute the toc command."""
    loader = NavigationLoader(book_path)
    document = loader.load()

    if document is None:
        console.print("[yellow]EPUB 3 book without an NCX navigation document.[/]")
        return

    console.print()
    console.print(
        Panel(
            "\n".join(build_info_lines(document, loader)),
            title="Book Information",
            border_style="green",
        )
    )
    console.print()
    console.print(build_toc_tree(document))

    if show_pages:
        console.print()
        if document.page_list is None:
            console.print("[dim]No page list[/]")
        else:
            console.print(build_page_table(document))

    if show_lists:
        tables = build_list_tables(document)
        if not tables:
            console.print()
            console.print("[dim]No navigation lists[/]")
        for table in tables:
            console.print()
            console.print(table)

    console.print()
