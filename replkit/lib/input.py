"""
Line sources for replkit.

A line source owns terminal (or stream) state, reads one line at a time
and keeps the ordered command history used for recall. Every read is
reported as a `ReadResult`; exceptions raised while reading are folded
into that result here so the dispatcher only ever branches on
`ReadOutcome`.

The module provides:
- `PromptLineSource`: interactive, backed by prompt_toolkit
- `StreamLineSource`: non-interactive, reads a text stream such as piped stdin
- `mode_detect`: choose between the two
"""

import sys
from pathlib import Path
from typing import Any, Optional, TextIO
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI
from replkit.config.settings import appsettings
from replkit.lib.errors import ConstructionError
from replkit.lib.history import ReplHistory, history_read, history_write
from replkit.lib.log import LOG
from replkit.models.dataModel import InputMode, ReadResult


class _HistoryMixin:
    """History capabilities shared by all line sources."""

    history: ReplHistory

    def append_history(self, entry: str) -> None:
        """Record one entry for recall."""
        self.history.record(entry)

    def history_strings(self) -> list[str]:
        return self.history.entries()

    def load_history(self, path: str | Path) -> None:
        """Replace the in-memory history with the contents of `path`.

        Raises:
            HistoryError: If the file cannot be read
        """
        entries: list[str] = history_read(path)
        self.history.replace(entries)
        LOG(f"Loaded {len(entries)} history entries from {path}")

    def save_history(self, path: str | Path) -> None:
        """Write the in-memory history to `path`.

        Raises:
            HistoryError: If the file cannot be written
        """
        history_write(path, self.history.entries(), self.history.size)
        LOG(f"Saved history to {path}")


class PromptLineSource(_HistoryMixin):
    """Interactive line source with editing and up/down recall."""

    def __init__(
        self,
        *,
        history_size: Optional[int] = None,
        ignore_dups: Optional[bool] = None,
        require_tty: Optional[bool] = None,
        input: Optional[Any] = None,
        output: Optional[Any] = None,
    ) -> None:
        """Create the prompt session.

        Args:
            history_size: Maximum entries kept; defaults to settings
            ignore_dups: Skip consecutive duplicates; defaults to settings
            require_tty: Refuse a non-interactive stdin; defaults to settings.
                Ignored when an explicit `input` is given.
            input: prompt_toolkit input object (tests use a pipe input)
            output: prompt_toolkit output object

        Raises:
            ConstructionError: If no interactive session can be set up
            ValueError: If `history_size` is not positive
        """
        if require_tty is None:
            require_tty = appsettings.require_tty
        if input is None and require_tty and not _stdin_isatty():
            raise ConstructionError("stdin is not an interactive terminal")

        self.history = ReplHistory(size=history_size, ignore_dups=ignore_dups)
        try:
            self.session: PromptSession[str] = PromptSession(
                history=self.history,
                enable_history_search=True,
                input=input,
                output=output,
            )
        except Exception as e:
            LOG(f"Prompt session init failed: {e}")
            raise ConstructionError(f"Cannot initialize line editor: {e}") from e

    def read_line(self, prompt: str) -> ReadResult:
        """Block until the user enters a line or signals.

        Ctrl-C maps to INTERRUPT and Ctrl-D to END_OF_INPUT.
        """
        try:
            text: str = self.session.prompt(ANSI(prompt))
        except KeyboardInterrupt:
            return ReadResult.interrupt()
        except EOFError:
            return ReadResult.end_of_input()
        except Exception as e:
            return ReadResult.failure(e)
        return ReadResult.line(text)

    def close(self) -> None:
        """Nothing to release; prompt_toolkit restores the terminal after
        every prompt."""


class StreamLineSource(_HistoryMixin):
    """Line source over a text stream, for piped or redirected input.

    The prompt is not rendered.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        history_size: Optional[int] = None,
        ignore_dups: Optional[bool] = None,
        owns_stream: bool = False,
    ) -> None:
        self.stream: TextIO = stream if stream is not None else sys.stdin
        self.owns_stream: bool = owns_stream
        self.history = ReplHistory(size=history_size, ignore_dups=ignore_dups)

    def read_line(self, prompt: str) -> ReadResult:
        try:
            line: str = self.stream.readline()
        except KeyboardInterrupt:
            return ReadResult.interrupt()
        except Exception as e:
            return ReadResult.failure(e)
        if not line:
            return ReadResult.end_of_input()
        return ReadResult.line(line.rstrip("\r\n"))

    def close(self) -> None:
        if self.owns_stream:
            self.stream.close()


def _stdin_isatty() -> bool:
    try:
        return sys.stdin is not None and sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def mode_detect() -> InputMode:
    """Detect the appropriate input mode.

    Returns:
        InputMode: prompt-driven when stdin is a terminal, stream-driven
        otherwise
    """
    interactive: bool = _stdin_isatty()
    return InputMode(interactive=interactive, use_prompt=interactive)
