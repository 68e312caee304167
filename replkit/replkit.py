"""
replkit Main Module.

Entry point for the bundled interactive command palette, built on the
`Repl` dispatcher.

Features:
- Interactive session with line editing and up/down recall
- Non-interactive mode when stdin is piped or redirected
- History persisted across runs

Examples:
    Start an interactive session:
        $ replkit

    Custom prompt, explicit history file:
        $ replkit --prompt "admin> " --history ~/.admin_history

    Scripted input:
        $ printf 'echo hello\\nhistory\\n' | replkit
"""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from pathlib import Path
from typing import Final, Optional
import sys
from rich.console import Console
from replkit.config.settings import appsettings
from replkit.lib.command import CommandPalette
from replkit.lib.errors import ConstructionError, FatalError, HistoryError
from replkit.lib.input import PromptLineSource, StreamLineSource, mode_detect
from replkit.lib.log import LOG
from replkit.lib.repl import Repl
from replkit.models.dataModel import InputMode, LineSource

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console(stderr=True)

parser: Final[ArgumentParser] = ArgumentParser(
    prog="replkit",
    description="An interactive command palette built on the replkit loop.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument("--prompt", type=str, default=None, help="Prompt string")
parser.add_argument(
    "--history",
    type=Path,
    default=None,
    help=f"History file (default: {appsettings.history_file})",
)
parser.add_argument(
    "--no-history", action="store_true", help="Do not load or save history"
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def lineSource_create(mode: InputMode) -> LineSource:
    """Pick the line source matching the input mode.

    Raises:
        ConstructionError: If the interactive line source cannot start
    """
    if mode.use_prompt:
        return PromptLineSource()
    return StreamLineSource(sys.stdin)


def history_path(options: Namespace) -> Optional[Path]:
    if options.no_history:
        return None
    return options.history if options.history else appsettings.history_file


def session_run(options: Namespace) -> int:
    """Run one session.

    Returns:
        int: Process exit status
    """
    prompt: str = options.prompt if options.prompt is not None else appsettings.prompt
    palette: CommandPalette = CommandPalette()

    try:
        repl: Repl = Repl(
            prompt, palette, line_source=lineSource_create(mode_detect())
        )
    except ConstructionError as e:
        LOG(f"Session construction failed: {e}")
        console.print(f"[bold red]Cannot start session:[/bold red] {e}")
        return 1

    palette.context.history_get = repl.line_source.history_strings
    path: Optional[Path] = history_path(options)

    with repl:
        if path:
            try:
                repl.load_history(path)
            except HistoryError as e:
                LOG(f"History not loaded: {e}")
        try:
            repl.run()
        except FatalError:
            return 1
        if path:
            try:
                repl.save_history(path)
            except HistoryError as e:
                LOG(f"History not saved: {e}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Console script entry point."""
    options: Namespace = parser.parse_args(argv)
    sys.exit(session_run(options))
