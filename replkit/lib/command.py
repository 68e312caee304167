"""
Command palette handler.

`CommandPalette` is a ready-made `CommandHandler` that splits each command
with shell-like quoting and dispatches it to a Click group. Handles:
- Built-in exit/quit, and help for the palette or one command
- Command parsing
- Usage errors
- Unexpected command failures
"""

import shlex
import click
from typing import Final, Optional
from rich.console import Console
from rich.markup import escape
from replkit.commands.app import cli
from replkit.lib.log import LOG
from replkit.models.dataModel import PaletteContext

console: Final[Console] = Console()

EXIT_COMMANDS: Final[frozenset[str]] = frozenset({"exit", "quit"})


class CommandPalette:
    """Dispatch commands to a Click group.

    Every command keeps the session alive except `exit` and `quit`.
    Errors are reported on the console and never end the session.
    """

    def __init__(
        self,
        group: Optional[click.Group] = None,
        context: Optional[PaletteContext] = None,
    ) -> None:
        self.group: click.Group = group if group is not None else cli
        self.context: PaletteContext = (
            context if context is not None else PaletteContext()
        )

    def _invoke(self, args: list[str]) -> None:
        self.group.main(
            args=args, prog_name="", standalone_mode=False, obj=self.context
        )

    def handle(self, command: str) -> bool:
        """Run one command.

        Args:
            command: Non-empty command text

        Returns:
            bool: False for exit/quit, True otherwise
        """
        try:
            parts: list[str] = shlex.split(command)
        except ValueError as e:
            LOG(f"Error parsing command: {e}")
            console.print(f"[bold red]Error parsing input: {escape(str(e))}[/bold red]")
            return True

        if not parts:
            console.print("[bold red]Error: No command provided.[/bold red]")
            return True

        name: str = parts[0]
        args: list[str] = parts[1:]

        if name in EXIT_COMMANDS:
            return False

        try:
            if name == "help":
                self._invoke(args[:1] + ["--help"])
            else:
                self._invoke([name] + args)
        except click.exceptions.UsageError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        except click.exceptions.Abort:
            console.print("[bold yellow]Aborted.[/bold yellow]")
        except SystemExit:
            pass
        except Exception as e:
            LOG(f"Command processing error: {e}")
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
        return True
