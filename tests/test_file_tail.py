"""Tests for file tailing sessions."""

import pytest
from PyQt6.QtCore import QCoreApplication, QEvent

from pyqt_logtab.core import FileTailWatcher, MissingLogFileError, TailSession


@pytest.fixture
def watcher(qapp):
    watcher = FileTailWatcher(poll_interval_ms=20)
    yield watcher
    watcher.stop()


def _collect(session):
    lines, errors = [], []
    session.line_received.connect(lines.append)
    session.error_occurred.connect(errors.append)
    return lines, errors


def test_existing_content_is_read_from_beginning(watcher, log_file, append_to, wait_until):
    append_to(log_file, "first\nsecond\n")
    session = watcher.start(log_file)
    lines, _ = _collect(session)

    assert wait_until(lambda: lines == ["first", "second"])


def test_from_end_skips_existing_content(watcher, log_file, append_to, wait_until, pump):
    append_to(log_file, "old\n")
    session = watcher.start(log_file, from_beginning=False)
    lines, _ = _collect(session)

    pump(0.1)
    append_to(log_file, "new\n")
    assert wait_until(lambda: lines == ["new"])


def test_lines_arrive_in_append_order(watcher, log_file, append_to, wait_until):
    session = watcher.start(log_file)
    lines, _ = _collect(session)

    expected = [f"line {i}" for i in range(200)]
    for line in expected:
        append_to(log_file, line + "\n")

    assert wait_until(lambda: len(lines) == len(expected))
    assert lines == expected


def test_partial_line_waits_for_newline(watcher, log_file, append_to, wait_until, pump):
    session = watcher.start(log_file)
    lines, _ = _collect(session)

    append_to(log_file, "half")
    pump(0.15)
    assert lines == []

    append_to(log_file, " done\r\n")
    assert wait_until(lambda: lines == ["half done"])


def test_multibyte_character_split_across_writes(watcher, log_file, wait_until, pump):
    session = watcher.start(log_file)
    lines, _ = _collect(session)

    encoded = "café\n".encode("utf-8")
    with open(log_file, "ab") as f:
        f.write(encoded[:4])
        f.flush()
    pump(0.1)
    with open(log_file, "ab") as f:
        f.write(encoded[4:])
        f.flush()

    assert wait_until(lambda: lines == ["café"])


def test_truncation_restarts_from_top(watcher, log_file, append_to, wait_until):
    append_to(log_file, "a long first run line\n")
    session = watcher.start(log_file)
    lines, _ = _collect(session)
    assert wait_until(lambda: lines == ["a long first run line"])

    log_file.write_text("rerun\n")
    assert wait_until(lambda: lines[-1:] == ["rerun"])


def test_missing_file_raises_synchronously(watcher, tmp_path):
    with pytest.raises(MissingLogFileError) as info:
        watcher.start(tmp_path / "no_such_file.log")
    assert info.value.path == tmp_path / "no_such_file.log"
    assert watcher.active_session is None


def test_directory_is_treated_as_missing(watcher, tmp_path):
    with pytest.raises(MissingLogFileError):
        watcher.start(tmp_path)


def test_deleted_file_reports_error_once_and_keeps_session(watcher, log_file, wait_until, pump):
    session = watcher.start(log_file)
    _, errors = _collect(session)

    log_file.unlink()
    assert wait_until(lambda: len(errors) == 1)
    pump(0.2)
    assert len(errors) == 1
    assert session.is_active


def test_stop_is_idempotent(watcher, log_file):
    session = watcher.start(log_file)
    stopped = []
    session.stopped.connect(lambda: stopped.append(True))

    session.stop()
    session.stop()
    watcher.stop(session)
    watcher.stop(None)

    assert stopped == [True]
    assert not session.is_active


def test_stopped_session_drops_late_lines(watcher, log_file, append_to, pump):
    session = watcher.start(log_file)
    lines, _ = _collect(session)

    append_to(log_file, "late\n")
    session.stop()
    pump(0.2)
    assert lines == []


def test_starting_new_session_stops_previous(watcher, tmp_path, append_to, wait_until):
    first_path = tmp_path / "a.log"
    second_path = tmp_path / "b.log"
    append_to(first_path, "from a\n")
    append_to(second_path, "from b\n")

    first = watcher.start(first_path)
    first_lines, _ = _collect(first)
    second = watcher.start(second_path)
    second_lines, _ = _collect(second)

    assert not first.is_active
    assert watcher.active_session is second
    assert second.session_id != first.session_id
    assert wait_until(lambda: second_lines == ["from b"])
    assert first_lines == []


def test_snapshot_reads_once_and_finishes(watcher, log_file, append_to, wait_until):
    append_to(log_file, "done\nno newline at end")
    session = watcher.start(log_file, follow=False)
    lines, _ = _collect(session)
    stopped = []
    session.stopped.connect(lambda: stopped.append(True))

    assert wait_until(lambda: stopped == [True])
    assert lines == ["done", "no newline at end"]
    assert not session.is_active
    assert watcher.active_session is None


def test_draining_stop_delivers_unread_lines(watcher, log_file, append_to, wait_until, pump):
    append_to(log_file, "start\n")
    session = watcher.start(log_file)
    lines, _ = _collect(session)
    stopped = []
    session.stopped.connect(lambda: stopped.append(True))
    assert wait_until(lambda: lines == ["start"])

    append_to(log_file, "Traceback (most recent call last):\nValueError: bad input\nexit")
    watcher.stop(session, drain=True)

    assert lines == ["start", "Traceback (most recent call last):", "ValueError: bad input", "exit"]
    assert stopped == [True]
    assert not session.is_active

    append_to(log_file, "\nafter\n")
    pump(0.2)
    assert lines[-1] == "exit"


def test_replaced_sessions_are_released(watcher, tmp_path, append_to):
    paths = [tmp_path / "a.log", tmp_path / "b.log"]
    for path in paths:
        append_to(path, "x\n")

    for i in range(20):
        watcher.start(paths[i % 2])
    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete.value)

    assert len(watcher.findChildren(TailSession)) == 1
    watcher.stop()
    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete.value)
    assert watcher.findChildren(TailSession) == []
