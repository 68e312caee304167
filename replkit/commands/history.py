"""
History command.

Command:
- history [--limit N]: List commands entered so far, oldest first, numbered
"""

from typing import Optional
from rich.console import Console
from rich.markup import escape
import click
from replkit.commands.base import RichCommand, rich_help
from replkit.models.dataModel import PaletteContext

console: Console = Console()


@click.command(
    cls=RichCommand,
    short_help="show command history",
    help=rich_help(
        command="history",
        description="Show the command history of this session",
        usage="history [--limit N]",
        args={"--limit, -n": "only show the N most recent entries"},
        examples=["", "-n 10"],
    ),
)
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None)
@click.pass_obj
def history(palette: Optional[PaletteContext], limit: Optional[int]) -> None:
    """
    Number each entry by its position in the full history.
    """
    entries: list[str] = palette.history_get() if palette else []
    if not entries:
        console.print("[yellow]History is empty.[/yellow]")
        return
    start: int = max(len(entries) - limit, 0) if limit else 0
    for index, entry in enumerate(entries[start:], start=start + 1):
        console.print(f"[cyan]{index:>4}[/cyan]  {escape(entry)}", highlight=False)
