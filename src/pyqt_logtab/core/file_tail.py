"""
Real-time tailing of a single log file.

A LogTailer thread polls the file and reads whatever was appended since the
last poll. The TailSession that owns it lives on the GUI thread and
re-emits complete lines there. Sessions are identified by an integer id;
anything arriving for a stopped session, or tagged with another session's
id, is dropped.

Design Decisions:
    - Polling rather than QFileSystemWatcher: the watcher coalesces
      notifications and misses writes to files held open by another process
    - Partial lines are buffered as bytes so multi-byte characters split
      across reads decode correctly
    - Truncation (size smaller than our offset) restarts from offset 0
"""

import itertools
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from PyQt6.QtCore import QCoreApplication, QEvent, QObject, QThread, pyqtSignal

from pyqt_logtab.core.exceptions import MissingLogFileError

logger = logging.getLogger(__name__)

# --- Module-level constants ---
POLL_INTERVAL_MS = 100    # Sleep between polls
STOP_WAIT_MS = 1000       # Max wait for the tailer thread when stopping
DEFAULT_ENCODING = "utf-8"

_session_ids = itertools.count(1)


class LogTailer(QThread):
    """Background thread that polls one log file for appended lines."""

    # Signals
    lines_read = pyqtSignal(int, list)      # (session_id, complete lines in file order)
    error_occurred = pyqtSignal(int, str)   # (session_id, error message)
    log_rotated = pyqtSignal(int)           # (session_id,) file shrank below our offset

    def __init__(
        self,
        session_id: int,
        log_path: Path,
        initial_position: int = 0,
        follow: bool = True,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        encoding: str = DEFAULT_ENCODING,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.session_id = session_id
        self.log_path = log_path
        self.file_position = initial_position
        self._follow = follow
        self._poll_interval_ms = poll_interval_ms
        self._encoding = encoding
        self._partial = b""
        self._last_error: Optional[str] = None
        self._running = True

    def run(self):
        """Poll the file until stopped (or once, when not following)."""
        while self._running:
            try:
                lines = self._read_new_lines()
                self._last_error = None
            except OSError as e:
                self._report_error(str(e))
                lines = []

            if lines and self._running:
                self.lines_read.emit(self.session_id, lines)

            if not self._follow:
                if self._partial and self._running:
                    # File is complete; the last line just lacks a newline
                    self.lines_read.emit(self.session_id, [self._decode(self._partial)])
                    self._partial = b""
                break

            self.msleep(self._poll_interval_ms)

    def stop(self):
        """Ask the thread to exit after its current poll."""
        self._running = False

    def read_remaining(self) -> List[str]:
        """
        Read everything left in the file, including a trailing partial line.

        Only call once the thread has finished; it shares the read offset.
        """
        lines = self._read_new_lines()
        if self._partial:
            lines.append(self._decode(self._partial))
            self._partial = b""
        return lines

    def _report_error(self, message: str) -> None:
        # Same failure on every poll (e.g. file deleted) is reported once
        if message != self._last_error:
            self._last_error = message
            self.error_occurred.emit(self.session_id, message)

    def _decode(self, data: bytes) -> str:
        return data.decode(self._encoding, errors="replace").rstrip("\r")

    def _read_new_lines(self) -> List[str]:
        """Read complete lines appended since the last poll."""
        with open(self.log_path, "rb") as f:
            current_size = os.fstat(f.fileno()).st_size

            if current_size < self.file_position:
                logger.info(f"Log truncated or replaced, restarting from top: {self.log_path}")
                self.file_position = 0
                self._partial = b""
                self.log_rotated.emit(self.session_id)

            if current_size == self.file_position:
                return []

            f.seek(self.file_position)
            new_data = f.read(current_size - self.file_position)

        self.file_position += len(new_data)

        chunks = (self._partial + new_data).split(b"\n")
        # Last chunk is either b"" (data ended on newline) or an incomplete line
        self._partial = chunks.pop()
        return [self._decode(chunk) for chunk in chunks]


class TailSession(QObject):
    """
    One live binding between a log file and the subscribers of its lines.

    Usage:
        session = watcher.start(path)
        session.line_received.connect(on_line)
        session.error_occurred.connect(on_error)
        ...
        session.stop()  # Safe to call any number of times
    """

    line_received = pyqtSignal(str)
    error_occurred = pyqtSignal(str)
    stopped = pyqtSignal()

    def __init__(
        self,
        file_path: Path,
        from_beginning: bool = True,
        follow: bool = True,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        stop_wait_ms: int = STOP_WAIT_MS,
        encoding: str = DEFAULT_ENCODING,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.session_id = next(_session_ids)
        self.file_path = Path(file_path)
        self.from_beginning = from_beginning
        self.follow = follow
        self._stop_wait_ms = stop_wait_ms
        self._active = False
        self._stopping = False

        initial_position = 0 if from_beginning else self.file_path.stat().st_size
        self._tailer = LogTailer(
            self.session_id,
            self.file_path,
            initial_position=initial_position,
            follow=follow,
            poll_interval_ms=poll_interval_ms,
            encoding=encoding,
            parent=self,
        )
        self._tailer.lines_read.connect(self._on_lines_read)
        self._tailer.error_occurred.connect(self._on_error)
        self._tailer.finished.connect(self._on_tailer_finished)

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active or self._tailer.isRunning():
            return
        self._active = True
        self._tailer.start()
        logger.debug(f"Started tailing (session {self.session_id}): {self.file_path}")

    def stop(self, drain: bool = False) -> None:
        """
        Detach subscribers; late events from the thread are discarded.

        Args:
            drain: Before detaching, deliver the lines the thread already read
                and whatever is still unread in the file
        """
        if not self._active or self._stopping:
            return
        self._stopping = True
        self._tailer.stop()
        if not self._tailer.wait(self._stop_wait_ms):
            logger.warning(f"Tailer thread for {self.file_path} did not exit within {self._stop_wait_ms} ms")
        elif drain:
            self._drain()
        self._active = False
        logger.debug(f"Stopped tailing (session {self.session_id}): {self.file_path}")
        self.stopped.emit()

    def delete_when_finished(self) -> None:
        """Schedule deletion of the session and its thread once the thread exits."""
        if self._tailer.isRunning():
            self._tailer.finished.connect(self.deleteLater)
        else:
            self.deleteLater()

    def _drain(self) -> None:
        # Thread has exited: its queued batches are delivered first, then the
        # remainder is read here on the GUI thread, keeping file order
        QCoreApplication.sendPostedEvents(None, QEvent.Type.MetaCall.value)
        try:
            lines = self._tailer.read_remaining()
        except OSError as e:
            logger.debug(f"Nothing left to drain from {self.file_path}: {e}")
            return
        self._on_lines_read(self.session_id, lines)

    def _on_lines_read(self, session_id: int, lines: list) -> None:
        for line in lines:
            # A subscriber may stop the session part way through a batch
            if session_id != self.session_id or not self._active:
                return
            self.line_received.emit(line)

    def _on_error(self, session_id: int, message: str) -> None:
        if session_id != self.session_id or not self._active:
            return
        self.error_occurred.emit(message)

    def _on_tailer_finished(self) -> None:
        # Only reached while active for follow=False sessions that read to the end
        if self._active and not self._stopping:
            self._active = False
            logger.debug(f"Finished reading (session {self.session_id}): {self.file_path}")
            self.stopped.emit()


class FileTailWatcher(QObject):
    """
    Starts and stops TailSessions, keeping at most one alive.

    Usage:
        watcher = FileTailWatcher()
        try:
            session = watcher.start(log_path)
        except MissingLogFileError:
            show_placeholder()
        ...
        watcher.stop(session)
    """

    def __init__(
        self,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        stop_wait_ms: int = STOP_WAIT_MS,
        encoding: str = DEFAULT_ENCODING,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._poll_interval_ms = poll_interval_ms
        self._stop_wait_ms = stop_wait_ms
        self._encoding = encoding
        self._session: Optional[TailSession] = None

    @property
    def active_session(self) -> Optional[TailSession]:
        if self._session is not None and self._session.is_active:
            return self._session
        return None

    def start(
        self,
        file_path: Union[str, Path],
        from_beginning: bool = True,
        follow: bool = True,
    ) -> TailSession:
        """
        Start tailing file_path, stopping any previous session first.

        Args:
            file_path: Log file to tail
            from_beginning: Surface the file's existing content before new appends
            follow: Keep polling for appends; False reads the current content once

        Returns:
            The new, already started TailSession

        Raises:
            MissingLogFileError: If file_path is not an existing file
        """
        self.stop(self._session)

        path = Path(file_path)
        if not path.is_file():
            raise MissingLogFileError(path)

        session = TailSession(
            path,
            from_beginning=from_beginning,
            follow=follow,
            poll_interval_ms=self._poll_interval_ms,
            stop_wait_ms=self._stop_wait_ms,
            encoding=self._encoding,
            parent=self,
        )
        self._session = session
        session.start()
        return session

    def stop(self, session: Optional[TailSession] = None, drain: bool = False) -> None:
        """
        Stop session (default: the current one). No-op if already stopped.

        The current session is released once stopped; a replaced session was
        already released when it was replaced.
        """
        if session is None:
            session = self._session
        if session is None:
            return
        session.stop(drain=drain)
        if session is self._session:
            self._session = None
            session.delete_when_finished()
