"""Job status banner with colored dot, summary text and job actions."""

from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from pyqt_logtab.core.job_status import JobStatus, StatusSummary
from pyqt_logtab.theming import ColorScheme


def get_status_color(status: JobStatus, color_scheme: ColorScheme) -> str:
    """Resolve job status to color from scheme."""
    COLOR_MAP = {
        JobStatus.NOT_STARTED: color_scheme.text_secondary,
        JobStatus.RUNNING: color_scheme.status_info,
        JobStatus.SUCCESS: color_scheme.status_success,
        JobStatus.ERROR: color_scheme.status_error,
        JobStatus.CANCELED: color_scheme.status_warning,
    }
    return color_scheme.to_hex(COLOR_MAP[status])


class StatusBanner(QWidget):
    """
    Banner showing a StatusSummary with "Cancel Run" and "Open Workspace" buttons.

    Usage:
        banner = StatusBanner(color_scheme=self.color_scheme, parent=self)
        controller.summary_changed.connect(banner.set_summary)
        banner.cancel_requested.connect(job_runner.terminate)
        banner.open_workspace_requested.connect(controller.reveal_log_file)
    """

    cancel_requested = pyqtSignal()
    open_workspace_requested = pyqtSignal()

    def __init__(self, color_scheme: ColorScheme = None, parent=None):
        super().__init__(parent)
        self._color_scheme = color_scheme or ColorScheme()
        self._summary: Optional[StatusSummary] = None

        self._setup_ui()
        self.set_summary(StatusSummary(JobStatus.NOT_STARTED))

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        # Colored dot
        self._dot = QLabel("●")
        self._dot.setFixedWidth(12)
        layout.addWidget(self._dot)

        # Summary text (last stderr line, completion message)
        self._label = QLabel("")
        self._label.setFont(QFont("Arial", 9))
        self._label.setWordWrap(True)
        layout.addWidget(self._label, 1)

        self._cancel_btn = QPushButton("Cancel Run")
        self._cancel_btn.clicked.connect(self.cancel_requested)
        layout.addWidget(self._cancel_btn)

        self._workspace_btn = QPushButton("Open Workspace")
        self._workspace_btn.clicked.connect(self.open_workspace_requested)
        layout.addWidget(self._workspace_btn)

    @property
    def summary(self) -> Optional[StatusSummary]:
        return self._summary

    @property
    def message(self) -> str:
        return self._label.text()

    @property
    def cancel_button(self) -> QPushButton:
        return self._cancel_btn

    @property
    def workspace_button(self) -> QPushButton:
        return self._workspace_btn

    def set_summary(self, summary: StatusSummary):
        """Update visual state."""
        self._summary = summary
        color = get_status_color(summary.status, self._color_scheme)
        self._dot.setStyleSheet(f"color: {color};")
        self._label.setText(summary.message or "")

        self._cancel_btn.setVisible(summary.can_cancel)
        self._workspace_btn.setVisible(summary.can_open_workspace)
        # Nothing to show before the job starts or after a cancel
        self.setVisible(summary.status not in (JobStatus.NOT_STARTED, JobStatus.CANCELED))
