"""
dataModel.py

Data models and interfaces used throughout replkit.
The models leverage Pydantic for validation and type safety.

Features:
- The closed set of outcomes a line read can produce
- The read result carried from a line source to the dispatcher
- Session states of the dispatcher loop
- The command handler capability interface
- Input mode detection for the bundled CLI
- The context object shared with palette commands
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Callable, Optional, Protocol, runtime_checkable
from enum import Enum
from dataclasses import dataclass, field


class ReadOutcome(Enum):
    """
    Enum for the kind of event a single `read_line` produced.
    """

    LINE = "line"
    INTERRUPT = "interrupt"
    END_OF_INPUT = "end_of_input"
    ERROR = "error"


class SessionState(Enum):
    """
    Enum for the dispatcher loop state.
    """

    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    TERMINATED_OK = "terminated_ok"
    TERMINATED_FATAL = "terminated_fatal"


class ReadResult(BaseModel):
    """Result of one line read.

    Attributes:
        kind: Which of the four read outcomes occurred
        text: The raw line, only meaningful for LINE
        error: The underlying exception, only set for ERROR
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: ReadOutcome
    text: str = ""
    error: Optional[BaseException] = Field(
        default=None, description="Underlying cause of a read failure."
    )

    @classmethod
    def line(cls, text: str) -> "ReadResult":
        return cls(kind=ReadOutcome.LINE, text=text)

    @classmethod
    def interrupt(cls) -> "ReadResult":
        return cls(kind=ReadOutcome.INTERRUPT)

    @classmethod
    def end_of_input(cls) -> "ReadResult":
        return cls(kind=ReadOutcome.END_OF_INPUT)

    @classmethod
    def failure(cls, error: BaseException) -> "ReadResult":
        return cls(kind=ReadOutcome.ERROR, error=error)


class InputMode(BaseModel):
    """Input mode determination.

    Attributes:
        interactive: Whether stdin is attached to a terminal
        use_prompt: Whether the prompt_toolkit line source should be used
    """

    interactive: bool = True
    use_prompt: bool = True


@runtime_checkable
class CommandHandler(Protocol):
    """Protocol for the pluggable command handler.

    Handlers must implement:
        handle(): Process one normalized command

    Note:
        The dispatcher never calls `handle` with empty or
        whitespace-only text.
    """

    def handle(self, command: str) -> bool:
        """Process a command.

        Args:
            command: Stripped, non-empty command text

        Returns:
            bool: True to keep the session going, False to end it
        """
        ...


@runtime_checkable
class LineSource(Protocol):
    """Protocol for the line-editing collaborator the dispatcher drives."""

    def read_line(self, prompt: str) -> ReadResult: ...

    def append_history(self, entry: str) -> None: ...

    def history_strings(self) -> list[str]: ...

    def load_history(self, path: str) -> None: ...

    def save_history(self, path: str) -> None: ...

    def close(self) -> None: ...


class FunctionHandler:
    """Adapt a plain callable into a `CommandHandler`.

    Example:
        FunctionHandler(lambda cmd: cmd != "quit")
    """

    def __init__(self, func: Callable[[str], bool]) -> None:
        self.func: Callable[[str], bool] = func

    def handle(self, command: str) -> bool:
        return bool(self.func(command))


@dataclass
class PaletteContext:
    """Context object handed to palette commands through click.

    Attributes:
        history_get: Returns the live session history, oldest first

    Example:
        * The embedding CLI wires `history_get` to the line source
          once the session exists, so "/history" reflects what the
          user has typed so far.
    """

    history_get: Callable[[], list[str]] = field(default=lambda: [])
