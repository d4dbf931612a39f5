"""Composite log tab: live log pane plus job status banner."""

import logging
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from pyqt_logtab.core.job_status import JobStatus
from pyqt_logtab.protocols.file_reveal import FileRevealProvider
from pyqt_logtab.protocols.log_tab_config import LogTabConfig, get_log_tab_config
from pyqt_logtab.services.log_tab_controller import LogTabController
from pyqt_logtab.theming import ColorScheme
from pyqt_logtab.widgets.log_display import LogDisplay
from pyqt_logtab.widgets.status_banner import StatusBanner


class LogTab(QWidget):
    """
    Log tab for one job.

    The host feeds job runner state in through set_log_file(),
    set_job_status() and set_stderr_text(), and connects cancel_requested
    to whatever terminates the job.

    Usage:
        tab = LogTab("natcap.invest.carbon", logger=app_logger)
        tab.cancel_requested.connect(runner.terminate)
        tab.set_log_file(runner.logfile)
        tab.set_job_status("running")
    """

    cancel_requested = pyqtSignal()

    def __init__(
        self,
        primary_module_name: str,
        log_file: Optional[Union[str, Path]] = None,
        job_status: Union[JobStatus, str, None] = None,
        stderr_text: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        color_scheme: ColorScheme = None,
        config: Optional[LogTabConfig] = None,
        reveal_provider: Optional[FileRevealProvider] = None,
        parent=None,
    ):
        super().__init__(parent)
        config = config or get_log_tab_config()
        self._color_scheme = color_scheme or ColorScheme()
        self._reveal_provider = reveal_provider

        self.controller = LogTabController(
            primary_module_name, logger=logger, config=config, parent=self
        )
        self.display = LogDisplay(
            color_scheme=self._color_scheme,
            error_label=config.error_label,
            primary_label=config.primary_label,
        )
        self.banner = StatusBanner(color_scheme=self._color_scheme)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.display, 1)
        layout.addWidget(self.banner)

        self.display.bind_buffer(self.controller.buffer)
        self.controller.summary_changed.connect(self.banner.set_summary)
        self.banner.cancel_requested.connect(self.cancel_requested)
        self.banner.open_workspace_requested.connect(self.open_workspace)

        self.controller.mount(log_path=log_file, job_status=job_status, stderr_text=stderr_text)

    def set_log_file(self, log_file: Optional[Union[str, Path]]) -> None:
        self.controller.set_log_path(log_file)

    def set_job_status(self, job_status: Union[JobStatus, str, None]) -> None:
        self.controller.set_job_status(job_status)

    def set_stderr_text(self, stderr_text: Optional[str]) -> None:
        self.controller.set_stderr_text(stderr_text)

    def open_workspace(self) -> bool:
        """Reveal the log file's folder in the file browser."""
        return self.controller.reveal_log_file(self._reveal_provider)

    def cleanup(self) -> None:
        """Stop tailing. Call before discarding the tab without closing it."""
        self.controller.unmount()

    def closeEvent(self, event):
        """Cleanup on close."""
        self.cleanup()
        super().closeEvent(event)
