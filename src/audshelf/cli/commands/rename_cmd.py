# ABOUTME: The `audshelf rename` command for setting a book's display title.
# ABOUTME: Sets or clears the custom title without touching the EPUB file.

from pathlib import Path

import click
from rich.console import Console

from audshelf.cli.lookup import BookLookupError, resolve_book
from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("rename")
@click.argument("book_id")
@click.argument("title", required=False, default="")
@library_option
@click.option("--clear", is_flag=True, default=False, help="Remove the custom title.")
def rename(book_id: str, title: str, library_root: Path | None, clear: bool) -> None:
    """Give a book a custom title (an empty TITLE clears it)."""
    service = open_library(library_root)

    try:
        record = resolve_book(service.books, book_id)
    except BookLookupError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    result = service.rename_book(record.id, "" if clear else title)
    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        raise SystemExit(1)

    console.print(f"[green]{result.message}[/green]")
