"""Subcommand modules for aacboard.

register_commands() imports lazily so ``aacboard --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    from aacboard.commands.board import board
    from aacboard.commands.catalog import catalog
    from aacboard.commands.interpret import interpret

    cli.add_command(interpret)
    cli.add_command(catalog)
    cli.add_command(board)
