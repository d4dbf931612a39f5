"""Read-only pane rendering a LogBuffer."""

import logging
from typing import Optional

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QTextBrowser, QWidget

from pyqt_logtab.core.log_buffer import LogBuffer
from pyqt_logtab.core.log_patterns import ERROR_LABEL, PRIMARY_LABEL
from pyqt_logtab.core.rich_text_appender import RichTextAppender
from pyqt_logtab.theming import ColorScheme

logger = logging.getLogger(__name__)


class LogDisplay(QTextBrowser):
    """
    Log pane that mirrors a LogBuffer and always shows its newest line.

    Usage:
        display = LogDisplay(color_scheme=scheme)
        display.bind_buffer(controller.buffer)
    """

    def __init__(
        self,
        color_scheme: ColorScheme = None,
        error_label: str = ERROR_LABEL,
        primary_label: str = PRIMARY_LABEL,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setObjectName("log-display")
        self.setReadOnly(True)
        self.setOpenLinks(False)
        self.setFont(QFont("Courier New", 9))

        self._color_scheme = color_scheme or ColorScheme()
        self._appender = RichTextAppender(self)
        self._buffer: Optional[LogBuffer] = None

        self.document().setDefaultStyleSheet(
            self._color_scheme.log_stylesheet(error_label, primary_label)
        )
        self.setStyleSheet(
            f"QTextBrowser#log-display {{ background-color: "
            f"{self._color_scheme.to_hex(self._color_scheme.panel_bg)}; "
            f"border: 1px solid {self._color_scheme.to_hex(self._color_scheme.border_color)}; }}"
        )

    @property
    def buffer(self) -> Optional[LogBuffer]:
        return self._buffer

    def bind_buffer(self, buffer: LogBuffer) -> None:
        """Render buffer now and follow its changes."""
        self.unbind_buffer()
        self._buffer = buffer
        buffer.fragment_appended.connect(self._appender.append_markup)
        buffer.content_reset.connect(self._appender.replace_markup)
        buffer.scroll_to_bottom_requested.connect(self.scroll_to_bottom)

        self._appender.replace_markup(buffer.text)
        self.scroll_to_bottom()

    def unbind_buffer(self) -> None:
        if self._buffer is None:
            return
        try:
            self._buffer.fragment_appended.disconnect(self._appender.append_markup)
            self._buffer.content_reset.disconnect(self._appender.replace_markup)
            self._buffer.scroll_to_bottom_requested.disconnect(self.scroll_to_bottom)
        except TypeError as e:
            logger.debug(f"Buffer signals already disconnected: {e}")
        self._buffer = None

    def scroll_to_bottom(self) -> None:
        """Scroll log view to bottom."""
        self._appender.scroll_to_bottom()
