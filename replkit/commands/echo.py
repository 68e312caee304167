"""
Echo command.

Command:
- echo TEXT...: Print the arguments back, joined by single spaces
"""

from rich.console import Console
import click
from replkit.commands.base import RichCommand, rich_help

console: Console = Console()


@click.command(
    cls=RichCommand,
    short_help="print arguments back",
    help=rich_help(
        command="echo",
        description="Print the arguments back",
        usage="echo <text>...",
        args={"<text>": "words to print; quote to keep spacing"},
        examples=["hello world", "\"two  spaces\""],
    ),
)
@click.argument("text", nargs=-1)
def echo(text: tuple[str, ...]) -> None:
    console.print(" ".join(text), markup=False, highlight=False)
