"""
Command history storage and persistence.

Provides:
- `ReplHistory`: a prompt_toolkit `History` fed only by the dispatcher
- `history_read` / `history_write`: UTF-8 files with one entry per line,
  oldest entry first

On disk, a backslash, line feed or carriage return inside an entry is
written as `\\\\`, `\\n` or `\\r`, so multi-line pastes survive a round trip.
"""

import re
from pathlib import Path
from typing import Final, Iterable, Optional
from prompt_toolkit.history import History
from replkit.config.settings import appsettings
from replkit.lib.errors import HistoryError

_ESCAPES: Final[dict[str, str]] = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES: Final[dict[str, str]] = {value: key for key, value in _ESCAPES.items()}
_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"[\\\n\r]")
_UNESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"\\[\\nr]")


def entry_escape(entry: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], entry)


def entry_unescape(line: str) -> str:
    # Unknown sequences such as "\t" are kept as typed.
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(0)], line)


def history_read(path: str | Path) -> list[str]:
    """Read history entries from a file.

    Args:
        path: History file location

    Returns:
        list[str]: Entries in chronological order, blank lines skipped

    Raises:
        HistoryError: If the file is missing or cannot be decoded
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            content: str = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise HistoryError(f"Cannot read history from {path}: {e}", str(path)) from e
    entries: list[str] = []
    for line in content.split("\n"):
        line = line.removesuffix("\r")  # files edited on Windows
        if line.strip():
            entries.append(entry_unescape(line))
    return entries


def history_write(
    path: str | Path, entries: list[str], limit: Optional[int] = None
) -> None:
    """Write history entries to a file, replacing its contents.

    Args:
        path: History file location; parent directories are created
        entries: Entries in chronological order
        limit: Keep only this many most recent entries

    Raises:
        HistoryError: If the file cannot be written
    """
    kept: list[str] = entries[max(len(entries) - limit, 0) :] if limit else list(entries)
    target: Path = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            "".join(f"{entry_escape(entry)}\n" for entry in kept),
            encoding="utf-8",
            newline="\n",
        )
    except OSError as e:
        raise HistoryError(f"Cannot write history to {path}: {e}", str(path)) from e


class ReplHistory(History):
    """Ordered command history shared with the line editor for recall.

    The editor calls `append_string` for every accepted buffer; those calls
    are ignored so that only normalized commands recorded through `record`
    end up in history.
    """

    def __init__(
        self, size: Optional[int] = None, ignore_dups: Optional[bool] = None
    ) -> None:
        super().__init__()
        self.size: int = size if size is not None else appsettings.history_size
        if self.size <= 0:
            raise ValueError(f"History size must be positive, got {self.size}")
        self.ignore_dups: bool = (
            ignore_dups if ignore_dups is not None else appsettings.history_ignore_dups
        )
        self._entries: list[str] = []

    def load_history_strings(self) -> Iterable[str]:
        # Newest first, as prompt_toolkit expects.
        return list(reversed(self._entries))

    def store_string(self, string: str) -> None:
        pass

    def append_string(self, string: str) -> None:
        """Editor-driven append; intentionally a no-op."""

    def _invalidate(self) -> None:
        # Forces the next editor load to pick up the current entries.
        self._loaded = False

    def entries(self) -> list[str]:
        """Return a copy of the entries, oldest first."""
        return list(self._entries)

    def record(self, entry: str) -> bool:
        """Append one entry.

        Returns:
            bool: False if the entry was skipped as a duplicate
        """
        if self.ignore_dups and self._entries and self._entries[-1] == entry:
            return False
        self._entries.append(entry)
        if len(self._entries) > self.size:
            del self._entries[: len(self._entries) - self.size]
        self._invalidate()
        return True

    def replace(self, entries: list[str]) -> None:
        self._entries = list(entries[max(len(entries) - self.size, 0) :])
        self._invalidate()
