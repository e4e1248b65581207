# ABOUTME: The `audshelf import` command for adding an EPUB to the library.
# ABOUTME: Copies the file into the library and creates its catalog record.

from pathlib import Path

import click
from rich.console import Console

from audshelf.cli.options import library_option
from audshelf.core.library import open_library

console = Console()


@click.command("import")
@click.argument(
    "path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@library_option
@click.option(
    "--allow-duplicates",
    is_flag=True,
    default=False,
    help="Store under a numbered name (book_1.epub) if the name is taken.",
)
def import_command(path: Path, library_root: Path | None, allow_duplicates: bool) -> None:
    """Import an EPUB file into the library."""
    service = open_library(library_root)
    result = service.import_book(path, allow_duplicate_names=allow_duplicates)

    if not result.success:
        console.print(f"[red]{result.message}[/red]")
        raise SystemExit(1)

    record = result.record
    console.print(f"[green]{result.message}[/green]")
    if record is not None:
        console.print(f"  [dim]ID:[/dim] {record.id}")
        console.print(f"  [dim]Title:[/dim] {record.display_title}")
