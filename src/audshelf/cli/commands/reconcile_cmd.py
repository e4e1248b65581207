# ABOUTME: The `audshelf reconcile` command for reporting startup repairs.
# ABOUTME: Runs reconciliation and summarizes cover fixes and migrated EPUBs.

from pathlib import Path

import click
from rich.console import Console

from audshelf.cli.options import library_option
from audshelf.core.library import build_library

console = Console()


@click.command("reconcile")
@library_option
def reconcile(library_root: Path | None) -> None:
    """Repair stale cover paths and catalog EPUBs that have no record."""
    service = build_library(library_root)
    result = service.startup()

    if not result.changed:
        console.print(f"[green]Library is consistent ({len(result.records)} book(s)).[/green]")
        return

    parts = []
    if result.covers_repaired:
        parts.append(f"[green]{len(result.covers_repaired)} cover path(s) repaired[/green]")
    if result.covers_cleared:
        parts.append(f"[yellow]{len(result.covers_cleared)} missing cover(s) cleared[/yellow]")
    if result.orphans_migrated:
        parts.append(f"[green]{len(result.orphans_migrated)} EPUB(s) added[/green]")
    console.print(", ".join(parts))

    for record in result.orphans_migrated:
        console.print(f"  [dim]added:[/dim] {record.display_title}")
