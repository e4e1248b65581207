# ABOUTME: Shared Click options for audshelf CLI commands.
# ABOUTME: Provides the --library option, which also reads $AUDSHELF_LIBRARY.

from pathlib import Path

import click

from audshelf.store.layout import DEFAULT_LIBRARY_ROOT, LIBRARY_ENV_VAR

library_option = click.option(
    "--library",
    "library_root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=LIBRARY_ENV_VAR,
    default=None,
    help=f"Library root directory (default: {DEFAULT_LIBRARY_ROOT}).",
)
