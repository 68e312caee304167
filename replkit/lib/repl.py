"""
REPL implementation for replkit.

This module provides the `Repl` dispatcher, managing:
- The read, normalize, record, dispatch loop
- Translation of line source signals into loop control
- History load/save delegation
- Diagnostics for fatal read errors

Example:
    class Calculator:
        def handle(self, command: str) -> bool:
            if command in ("quit", "exit"):
                return False
            print(f"Processing: {command}")
            return True

    with Repl("calc> ", Calculator()) as repl:
        try:
            repl.load_history(".calc_history")
        except HistoryError:
            pass
        repl.run()
        repl.save_history(".calc_history")
"""

from pathlib import Path
from types import TracebackType
from typing import Final, Optional, Type
from rich.console import Console
from rich.markup import escape
from replkit.lib.errors import FatalError
from replkit.lib.input import PromptLineSource
from replkit.lib.log import LOG
from replkit.models.dataModel import (
    CommandHandler,
    LineSource,
    ReadOutcome,
    ReadResult,
    SessionState,
)

# Diagnostics go to stderr
console: Final[Console] = Console(stderr=True)


class Repl:
    """Read-Eval-Print Loop driving a pluggable command handler.

    - Empty and whitespace-only lines are ignored
    - Ctrl-C discards the pending line and keeps the session alive
    - Ctrl-D (end of input) ends the session cleanly
    - Any other read error ends the session with `FatalError`
    """

    def __init__(
        self,
        prompt: str,
        handler: CommandHandler,
        *,
        line_source: Optional[LineSource] = None,
    ) -> None:
        """Create a session.

        Args:
            prompt: Shown verbatim before each read
            handler: Receives every accepted command
            line_source: Pre-built line source; a `PromptLineSource` on
                the controlling terminal is created when omitted

        Raises:
            ConstructionError: If the terminal line source cannot be set up
        """
        self.prompt: Final[str] = prompt
        self.handler: CommandHandler = handler
        self.line_source: LineSource = (
            line_source if line_source is not None else PromptLineSource()
        )
        self.state: SessionState = SessionState.AWAITING_INPUT

    def __enter__(self) -> "Repl":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the line source."""
        self.line_source.close()

    def load_history(self, path: str | Path) -> None:
        """Load command history from `path` for up/down recall.

        Raises:
            HistoryError: If the file is missing or unreadable. Safe to ignore.
        """
        self.line_source.load_history(str(path))

    def save_history(self, path: str | Path) -> None:
        """Save command history to `path`, typically at clean shutdown.

        Raises:
            HistoryError: If the file cannot be written. Safe to ignore.
        """
        self.line_source.save_history(str(path))

    def _record(self, command: str) -> None:
        try:
            self.line_source.append_history(command)
        except Exception as e:
            LOG(f"History append failed for {command!r}: {e}")

    def _fail(self, result: ReadResult) -> FatalError:
        self.state = SessionState.TERMINATED_FATAL
        LOG(f"Read failed: {result.error!r}")
        console.print(f"[bold red]Error:[/bold red] {escape(repr(result.error))}")
        return FatalError(f"Read failed: {result.error}", cause=result.error)

    def run(self) -> None:
        """Process commands until the handler stops or input ends.

        Raises:
            FatalError: On a read error other than interrupt or end of input
        """
        self.state = SessionState.AWAITING_INPUT
        while True:
            result: ReadResult = self.line_source.read_line(self.prompt)

            if result.kind is ReadOutcome.INTERRUPT:
                continue
            if result.kind is ReadOutcome.END_OF_INPUT:
                break
            if result.kind is ReadOutcome.ERROR:
                raise self._fail(result) from result.error

            command: str = result.text.strip()
            if not command:
                continue

            self._record(command)

            self.state = SessionState.DISPATCHING
            if not self.handler.handle(command):
                break
            self.state = SessionState.AWAITING_INPUT

        self.state = SessionState.TERMINATED_OK
