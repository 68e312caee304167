"""Tests for history storage and persistence."""

import asyncio
import pytest
from replkit.lib.errors import HistoryError
from replkit.lib.history import ReplHistory, history_read, history_write
from replkit.lib.input import StreamLineSource


async def editor_view(history: ReplHistory) -> list[str]:
    return [entry async for entry in history.load()]


def test_read_missing_file(tmp_path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(HistoryError) as excinfo:
        history_read(missing)
    assert excinfo.value.path == str(missing)


def test_read_skips_blank_lines(tmp_path) -> None:
    path = tmp_path / "history"
    path.write_text("one\n\n   \ntwo\n", encoding="utf-8")
    assert history_read(path) == ["one", "two"]


def test_write_creates_parents_and_keeps_latest(tmp_path) -> None:
    path = tmp_path / "nested" / "dir" / "history"
    history_write(path, ["a", "b", "c", "d"], limit=2)
    assert path.read_text(encoding="utf-8") == "c\nd\n"


def test_write_failure(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(HistoryError):
        history_write(blocker / "history", ["a"])


def test_record_ignores_consecutive_duplicates() -> None:
    history = ReplHistory(size=10, ignore_dups=True)
    assert history.record("ls") is True
    assert history.record("ls") is False
    assert history.record("pwd") is True
    assert history.record("ls") is True
    assert history.entries() == ["ls", "pwd", "ls"]


def test_record_keeps_duplicates_when_allowed() -> None:
    history = ReplHistory(size=10, ignore_dups=False)
    history.record("ls")
    history.record("ls")
    assert history.entries() == ["ls", "ls"]


def test_size_limit_drops_oldest() -> None:
    history = ReplHistory(size=3, ignore_dups=False)
    for entry in ["1", "2", "3", "4", "5"]:
        history.record(entry)
    assert history.entries() == ["3", "4", "5"]
    history.replace(["a", "b", "c", "d"])
    assert history.entries() == ["b", "c", "d"]


def test_editor_appends_are_ignored() -> None:
    history = ReplHistory(size=10, ignore_dups=False)
    history.append_string("   raw buffer text  ")
    assert history.entries() == []


def test_editor_sees_recorded_entries_newest_first() -> None:
    history = ReplHistory(size=10, ignore_dups=False)
    history.record("first")
    assert asyncio.run(editor_view(history)) == ["first"]
    history.record("second")
    assert asyncio.run(editor_view(history)) == ["second", "first"]


def test_round_trip_through_line_sources(tmp_path) -> None:
    path = tmp_path / "history"
    writer = StreamLineSource(ignore_dups=False)
    for entry in ["make", "make test", "git status", "make"]:
        writer.append_history(entry)
    writer.save_history(path)

    reader = StreamLineSource(ignore_dups=False)
    reader.load_history(path)
    assert reader.history_strings() == ["make", "make test", "git status", "make"]


def test_load_replaces_existing_entries(tmp_path) -> None:
    path = tmp_path / "history"
    path.write_text("old\n", encoding="utf-8")
    source = StreamLineSource(ignore_dups=False)
    source.append_history("current")
    source.load_history(path)
    assert source.history_strings() == ["old"]


def test_load_missing_leaves_history_untouched(tmp_path) -> None:
    source = StreamLineSource(ignore_dups=False)
    source.append_history("keep")
    with pytest.raises(HistoryError):
        source.load_history(tmp_path / "absent")
    assert source.history_strings() == ["keep"]


@pytest.mark.parametrize(
    "entry",
    [
        "a\nb",
        "x\u2028y",
        "page\x0cbreak",
        "vt\x0btab",
        "group\x1csep",
        "carriage\rreturn",
        "crlf\r\nend",
        "nel\x85line",
        "C:\\temp\\new",
        "literal \\n stays",
        "trailing\\",
    ],
)
def test_round_trip_preserves_special_characters(tmp_path, entry: str) -> None:
    path = tmp_path / "history"
    writer = StreamLineSource(ignore_dups=False)
    for item in ["before", entry, "after"]:
        writer.append_history(item)
    writer.save_history(path)

    reader = StreamLineSource(ignore_dups=False)
    reader.load_history(path)
    assert reader.history_strings() == ["before", entry, "after"]


def test_file_has_one_line_per_entry(tmp_path) -> None:
    path = tmp_path / "history"
    history_write(path, ["one\ntwo", "back\\slash", "cr\rhere"])
    assert path.read_bytes() == b"one\\ntwo\nback\\\\slash\ncr\\rhere\n"


def test_read_accepts_crlf_files(tmp_path) -> None:
    path = tmp_path / "history"
    path.write_bytes(b"ls\r\npwd\r\n")
    assert history_read(path) == ["ls", "pwd"]


@pytest.mark.parametrize("size", [0, -1])
def test_non_positive_size_is_rejected(size: int) -> None:
    with pytest.raises(ValueError, match="must be positive"):
        ReplHistory(size=size)


def test_replace_with_size_one_keeps_latest() -> None:
    history = ReplHistory(size=1, ignore_dups=False)
    history.replace(["a", "b"])
    assert history.entries() == ["b"]
    history.replace([])
    assert history.entries() == []
