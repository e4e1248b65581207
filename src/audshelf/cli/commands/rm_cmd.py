# ABOUTME: The `audshelf rm` command for deleting a book from the library.
# ABOUTME: Removes the EPUB file, its cover, and its catalog record after confirmation.

from pathlib import Path

import click
from rich.console import Console

from audshelf.cli.lookup import BookLookupError, resolve_book
from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("rm")
@click.argument("book_id")
@library_option
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
def rm(book_id: str, library_root: Path | None, yes: bool) -> None:
    """Delete a book, its EPUB file, and its cover."""
    service = open_library(library_root)

    try:
        record = resolve_book(service.books, book_id)
    except BookLookupError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    if not yes and not click.confirm(f"Delete '{record.display_title}'?"):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    result = service.delete_book(record.id)
    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        raise SystemExit(1)

    console.print(f"[green]{result.message}[/green]")
