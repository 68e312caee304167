"""Exception hierarchy for replkit.

ReplError
├── ConstructionError
├── HistoryError
└── FatalError

Interrupts and end-of-input are not errors here; line sources report
them as `ReadOutcome` values.
"""

from typing import Optional


class ReplError(Exception):
    """Base exception for all replkit errors."""


class ConstructionError(ReplError):
    """Raised when the interactive line source cannot be initialized."""


class HistoryError(ReplError):
    """Raised when history cannot be loaded from or saved to a path.

    Callers are free to ignore it, e.g. on a first run with no history file.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path: str = path


class FatalError(ReplError):
    """Raised by `Repl.run` when a read fails with something other than
    an interrupt or end-of-input."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause: Optional[BaseException] = cause
