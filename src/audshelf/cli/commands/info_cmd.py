# ABOUTME: The `audshelf info` command for displaying one book's record.
# ABOUTME: Shows every stored field for a book selected by id or id prefix.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audshelf.cli.lookup import BookLookupError, resolve_book
from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("info")
@click.argument("book_id")
@library_option
def info(book_id: str, library_root: Path | None) -> None:
    """Show the catalog record for a book."""
    service = open_library(library_root)

    try:
        record = resolve_book(service.books, book_id)
    except BookLookupError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", record.id)
    table.add_row("Title", record.display_title)
    if record.custom_title:
        table.add_row("Original", record.title)
    table.add_row("Author", record.author or "unknown")
    table.add_row("File", record.source_file_path)
    if not service.files.exists(record.source_path):
        table.add_row("", "[red]file missing[/red]")
    table.add_row("Cover", record.cover_image_path or "none")
    table.add_row("Imported", record.import_timestamp.isoformat())

    console.print(table)
