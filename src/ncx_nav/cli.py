"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ncx_nav.commands.export import execute_export
from ncx_nav.commands.toc import execute_toc
from ncx_nav.core.loader import NavigationLoader

app = typer.Typer(
    name="ncx-nav",
    help="Inspect and export the NCX table of contents of EPUB books.",
    add_completion=False,
)

console = Console()


def _check_supported(book_path: Path) -> None:
    if not NavigationLoader.is_supported(book_path):
        console.print(f"[red]Unsupported file format: {book_path.suffix}[/]")
        console.print("[dim]Supported formats: .epub, .ncx[/]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
) -> None:
    """Inspect and export the NCX table of contents of EPUB books."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()
def toc(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the book file (EPUB or NCX)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    pages: Annotated[
        bool,
        typer.Option(
            "--pages",
            "-p",
            help="Also show the page list",
        ),
    ] = False,
    lists: Annotated[
        bool,
        typer.Option(
            "--lists",
            "-l",
            help="Also show auxiliary navigation lists",
        ),
    ] = False,
) -> None:
    """Display book information and the navigation tree."""
    _check_supported(book_path)

    try:
        execute_toc(
            book_path=book_path,
            show_pages=pages,
            show_lists=lists,
            console=console,
        )
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command()
def export(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the book file (EPUB or NCX)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file path (default: {book_name}_navigation.json)",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
) -> None:
    """Export the navigation document as JSON."""
    _check_supported(book_path)

    try:
        execute_export(
            book_path=book_path,
            output_file=output,
            quiet=quiet,
            console=console,
        )
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
