# ABOUTME: The `audshelf ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of all books in import order.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("ls")
@library_option
def ls(library_root: Path | None) -> None:
    """List all books in the library."""
    service = open_library(library_root)
    records = service.list_books()

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Cover", width=5)
    table.add_column("Imported", no_wrap=True)

    for record in records:
        table.add_row(
            record.id[:8],
            record.display_title,
            record.author or "[dim]unknown[/dim]",
            "yes" if record.cover_image_path else "no",
            record.import_timestamp.strftime("%Y-%m-%d"),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
