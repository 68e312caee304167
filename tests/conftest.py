"""Shared fixtures: a scripted line source and a recording handler."""

import io
from typing import Iterator
from unittest.mock import patch
import pytest
from rich.console import Console
from replkit.models.dataModel import ReadResult


class ScriptedLineSource:
    """Line source replaying a fixed list of events.

    Plain strings are delivered as lines, `ReadResult` values as-is.
    Once the script is exhausted every read reports end of input.
    """

    def __init__(self, events: list) -> None:
        self.events: list = list(events)
        self.prompts: list[str] = []
        self.history: list[str] = []
        self.closed: bool = False
        self.loaded: list[str] = []
        self.saved: list[str] = []

    @property
    def reads(self) -> int:
        return len(self.prompts)

    def read_line(self, prompt: str) -> ReadResult:
        self.prompts.append(prompt)
        if not self.events:
            return ReadResult.end_of_input()
        event = self.events.pop(0)
        if isinstance(event, ReadResult):
            return event
        return ReadResult.line(event)

    def append_history(self, entry: str) -> None:
        self.history.append(entry)

    def history_strings(self) -> list[str]:
        return list(self.history)

    def load_history(self, path: str) -> None:
        self.loaded.append(path)

    def save_history(self, path: str) -> None:
        self.saved.append(path)

    def close(self) -> None:
        self.closed = True


class RecordingHandler:
    """Handler that records commands and stops on the given ones."""

    def __init__(self, stop_on: tuple[str, ...] = ("quit",)) -> None:
        self.stop_on: tuple[str, ...] = stop_on
        self.commands: list[str] = []

    def handle(self, command: str) -> bool:
        self.commands.append(command)
        return command not in self.stop_on


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def repl_output() -> Iterator[io.StringIO]:
    """Capture diagnostics written by the dispatcher."""
    output = io.StringIO()
    console = Console(file=output, width=200)
    with patch("replkit.lib.repl.console", console):
        yield output
