# ABOUTME: The `audshelf cover` command for assigning a cover image to a book.
# ABOUTME: Reads an image file, re-encodes it, and records it in the catalog.

from pathlib import Path

import click
from rich.console import Console

from audshelf.cli.lookup import BookLookupError, resolve_book
from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("cover")
@click.argument("book_id")
@click.argument(
    "image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@library_option
def cover(book_id: str, image: Path, library_root: Path | None) -> None:
    """Set IMAGE as the cover of a book."""
    service = open_library(library_root)

    try:
        record = resolve_book(service.books, book_id)
    except BookLookupError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    result = service.set_cover(record.id, image.read_bytes())
    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        raise SystemExit(1)

    console.print(f"[green]{result.message}[/green]")
