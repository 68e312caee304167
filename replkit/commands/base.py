"""
Rich help rendering for the command palette.

Click's own help formatter is bypassed: `RichGroup` lists the palette's
commands and `RichCommand` draws a command's help inside a titled panel.
`rich_help` builds the marked-up help text the panel shows.
"""

from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
import click
from replkit.lib.log import LOG

console: Console = Console()

PANEL_MAX_WIDTH: int = 80


def rich_help(
    command: str,
    description: str,
    usage: str,
    args: dict[str, str],
    examples: Optional[list[str]] = None,
) -> str:
    """
    Build palette help text with Rich markup.

    Argument names are padded to a common width so descriptions line up.

    :param command: Command name, used to prefix each example.
    :param description: One-line summary shown first.
    :param usage: Usage line, e.g. "history [--limit N]".
    :param args: Argument or option names mapped to descriptions.
    :param examples: Argument strings shown after the command name.
    :return: Help text with Rich markup.
    """
    lines: list[str] = [f"[bold cyan]{description}[/bold cyan]", ""]
    lines.append(f"[bold yellow]Usage:[/bold yellow] [green]{usage}[/green]")
    if args:
        pad: int = max(len(name) for name in args)
        lines += ["", "[bold yellow]Arguments:[/bold yellow]"]
        lines += [f"  [green]{name:<{pad}}[/green]  {desc}" for name, desc in args.items()]
    if examples:
        lines += ["", "[bold yellow]Examples:[/bold yellow]"]
        lines += [f"  {command} {example}".rstrip() for example in examples]
    return "\n".join(lines)


class RichGroup(click.Group):
    """
    A Click Group that renders its help with Rich.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the group-level help message.

        :param ctx: The Click context for the command group.
        :param formatter: The Click help formatter (unused).
        """
        try:
            console.print(
                "[bold yellow]Usage:[/bold yellow] [cyan]COMMAND[/cyan] "
                "[magenta][OPTIONS] [ARGS]...[/magenta]\n"
            )

            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

            if self.commands:
                console.print("[bold green]Available Commands:[/bold green]")
                for name, command in sorted(self.commands.items()):
                    console.print(
                        f"- [cyan]{name}[/cyan]: [white]{command.short_help or 'No description available.'}[/white]"
                    )
                console.print()
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """
    A Click Command whose help is a Rich panel titled with the command name.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            body: Text = Text.from_markup(self.help or "No help text available.")
            # Size the panel to the rendered text, not the markup.
            widest: int = max(line.cell_len for line in body.split())
            panel = Panel(
                body,
                title=f"[bold]{ctx.info_name or self.name}[/bold]",
                title_align="left",
                expand=False,
                width=min(widest + 4, PANEL_MAX_WIDTH),
                border_style="cyan",
            )
            console.print(panel)
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")
