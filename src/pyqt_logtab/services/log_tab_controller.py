"""
Lifecycle coordination between a job's status and the tail of its log.

The controller owns the LogBuffer and at most one TailSession. It starts a
session when the log path becomes known (or changes), stops it when the job
leaves the running state or the host goes away, and derives the status
summary shown next to the log.

States:
    Idle      no session
    Watching  session bound to the current log path

Transitions:
    Idle -> Watching       log path set while mounted, or job re-enters running
    Watching -> Watching   log path changes: old session stopped, buffer reset
    Watching -> Idle       job status leaves running; buffer kept as the record
    any -> Idle            unmount
"""

import logging
from functools import partial
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_logtab.core.exceptions import MissingLogFileError
from pyqt_logtab.core.file_tail import FileTailWatcher, TailSession
from pyqt_logtab.core.job_status import JobStatus, StatusSummary, summarize_status
from pyqt_logtab.core.log_buffer import LogBuffer
from pyqt_logtab.core.log_patterns import build_log_patterns
from pyqt_logtab.core.markup import encode_line, markup_line
from pyqt_logtab.protocols.file_reveal import FileRevealProvider, get_file_reveal_provider
from pyqt_logtab.protocols.log_tab_config import LogTabConfig, get_log_tab_config

PathLike = Union[str, Path]


def _normalize_path(path: Optional[PathLike]) -> Optional[str]:
    if path is None:
        return None
    path = str(path)
    return path or None


class LogTabController(QObject):
    """
    Binds a FileTailWatcher to externally supplied job status and log path.

    Usage:
        controller = LogTabController("natcap.invest.carbon", logger=app_logger)
        controller.buffer.fragment_appended.connect(display.append_markup)
        controller.mount(log_path=job.logfile, job_status=job.status)

        # Job runner updates:
        controller.set_job_status("error")
        controller.set_stderr_text(job.stderr)
        controller.summary.message  # "ValueError: bad input"

        # Host going away:
        controller.unmount()
    """

    summary_changed = pyqtSignal(object)  # StatusSummary
    session_started = pyqtSignal(str)     # log path
    session_stopped = pyqtSignal(str)     # log path
    read_error = pyqtSignal(str)          # error message from an active session

    def __init__(
        self,
        primary_module_name: str,
        logger: Optional[logging.Logger] = None,
        watcher: Optional[FileTailWatcher] = None,
        config: Optional[LogTabConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._logger = logger or logging.getLogger(__name__)
        self._config = config or get_log_tab_config()
        self.primary_module_name = primary_module_name
        self.patterns = build_log_patterns(
            primary_module_name,
            error_label=self._config.error_label,
            primary_label=self._config.primary_label,
        )
        self.buffer = LogBuffer(self)
        self._watcher = watcher or FileTailWatcher(
            poll_interval_ms=self._config.poll_interval_ms,
            stop_wait_ms=self._config.stop_wait_ms,
            encoding=self._config.encoding,
            parent=self,
        )

        self._session: Optional[TailSession] = None
        self._draining: Optional[TailSession] = None
        self._log_path: Optional[str] = None
        self._job_status = JobStatus.NOT_STARTED
        self._stderr_text: Optional[str] = None
        self._mounted = False

    # ========== STATE ==========

    @property
    def log_path(self) -> Optional[str]:
        return self._log_path

    @property
    def job_status(self) -> JobStatus:
        return self._job_status

    @property
    def stderr_text(self) -> Optional[str]:
        return self._stderr_text

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def is_watching(self) -> bool:
        return self._session is not None and self._session.is_active

    @property
    def active_session(self) -> Optional[TailSession]:
        return self._session if self.is_watching else None

    @property
    def summary(self) -> StatusSummary:
        """Status summary derived from job status and stderr text."""
        return summarize_status(
            self._job_status,
            self._stderr_text,
            error_placeholder=self._config.error_placeholder,
            success_message=self._config.success_message,
        )

    # ========== HOST LIFECYCLE ==========

    def mount(
        self,
        log_path: Optional[PathLike] = None,
        job_status: Union[JobStatus, str, None] = None,
        stderr_text: Optional[str] = None,
    ) -> None:
        """Attach to the host; tails the log path if one is known."""
        if log_path is not None:
            self._log_path = _normalize_path(log_path)
        if job_status is not None:
            self._job_status = JobStatus.coerce(job_status)
        if stderr_text is not None:
            self._stderr_text = stderr_text

        self._mounted = True
        if self._log_path:
            self._tail_log_file(self._log_path)
        self.summary_changed.emit(self.summary)

    def unmount(self) -> None:
        """Detach from the host, stopping any active session."""
        self._stop_session()
        self._mounted = False

    # ========== INPUTS ==========

    def set_log_path(self, log_path: Optional[PathLike]) -> None:
        """Update the log path; a new path while mounted starts a fresh session."""
        log_path = _normalize_path(log_path)
        if log_path == self._log_path:
            return
        self._log_path = log_path

        if not self._mounted:
            return
        if log_path:
            # Re-running a job produces a new logfile
            self._tail_log_file(log_path)
        else:
            self._stop_session()

    def set_job_status(self, job_status: Union[JobStatus, str, None]) -> None:
        """Update the job status, stopping or resuming the tail accordingly."""
        job_status = JobStatus.coerce(job_status)
        if job_status == self._job_status:
            return
        self._job_status = job_status

        if job_status != JobStatus.RUNNING:
            # Lines the job wrote just before exiting are delivered first
            self._stop_session(drain=True)
        elif self._mounted and self._log_path and not self.is_watching:
            self._tail_log_file(self._log_path)

        self.summary_changed.emit(self.summary)

    def set_stderr_text(self, stderr_text: Optional[str]) -> None:
        """Update accumulated stderr of the current or most recent run."""
        if stderr_text == self._stderr_text:
            return
        self._stderr_text = stderr_text
        if self._job_status == JobStatus.ERROR:
            self.summary_changed.emit(self.summary)

    def reveal_log_file(self, provider: Optional[FileRevealProvider] = None) -> bool:
        """Show the log file's folder in the platform file browser."""
        if not self._log_path:
            return False
        provider = provider or get_file_reveal_provider()
        return provider.reveal(self._log_path)

    # ========== SESSIONS ==========

    def _tail_log_file(self, log_path: str) -> None:
        self._stop_session()

        # A finished job's log will not grow; read it once and stay Idle
        follow = not self._job_status.is_finished
        try:
            session = self._watcher.start(log_path, from_beginning=True, follow=follow)
        except MissingLogFileError as error:
            placeholder = self._config.missing_file_message.format(path=log_path)
            self.buffer.reset(encode_line(placeholder))
            self._logger.error(f"Not able to read {log_path}")
            self._logger.debug(str(error))
            return

        self.buffer.reset()
        self._session = session
        session.line_received.connect(partial(self._on_line, session))
        session.error_occurred.connect(partial(self._on_error, session))
        session.stopped.connect(partial(self._on_session_stopped, session))
        self._logger.debug(f"watching file: {log_path}")
        self.session_started.emit(log_path)

    def _stop_session(self, drain: bool = False) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        was_active = session.is_active
        self._draining = session if drain else None
        try:
            self._watcher.stop(session, drain=drain)
        finally:
            self._draining = None
        if was_active:
            self._logger.debug(f"unwatching file: {session.file_path}")
            self.session_stopped.emit(str(session.file_path))

    def _on_line(self, session: TailSession, line: str) -> None:
        if session is not self._session and session is not self._draining:
            return
        self.buffer.append(markup_line(line, self.patterns) + "\n")

    def _on_error(self, session: TailSession, message: str) -> None:
        if session is not self._session:
            return
        self._logger.error(f"Error tailing {session.file_path}: {message}")
        self.read_error.emit(message)

    def _on_session_stopped(self, session: TailSession) -> None:
        # Only follow=False sessions end on their own while still current
        if session is not self._session:
            return
        self._session = None
        self._logger.debug(f"finished reading file: {session.file_path}")
        self.session_stopped.emit(str(session.file_path))
