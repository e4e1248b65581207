# ABOUTME: CLI package for audshelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from audshelf.cli.commands import (
    cover_cmd,
    import_cmd,
    info_cmd,
    ls_cmd,
    reconcile_cmd,
    rename_cmd,
    rm_cmd,
)


def _configure_logging(verbose: bool) -> None:
    """Route audshelf log records to stderr through rich."""
    logger = logging.getLogger("audshelf")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.group()
@click.version_option(package_name="audshelf")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """audshelf - a library manager for EPUBs you want read aloud."""
    _configure_logging(verbose)


cli.add_command(import_cmd.import_command)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(rename_cmd.rename)
cli.add_command(cover_cmd.cover)
cli.add_command(rm_cmd.rm)
cli.add_command(reconcile_cmd.reconcile)
