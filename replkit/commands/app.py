"""
Defines the root Click command group for the bundled command palette.

Usage:
Import `cli` to dispatch palette commands.
"""

import click
from replkit.commands.base import RichGroup
from replkit.commands.echo import echo
from replkit.commands.history import history


@click.group(
    cls=RichGroup,
    help="""
    replkit Command Palette

    Type a command name followed by its arguments.
    Use "exit" or "quit" to leave, "<command> --help" for details.
    """,
)
def cli() -> None:
    """
    The root Click command group.
    """
    pass


cli: click.Group = cli

cli.add_command(echo)
cli.add_command(history)
