"""Append-only display buffer for sanitized log markup."""

import logging
from typing import List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class LogBuffer(QObject):
    """
    Accumulates sanitized markup fragments for one watch session.

    Content only grows through append(); reset() swaps in a fresh fragment
    list instead of editing the old one. Every change emits
    scroll_to_bottom_requested after the content signals, so a view that
    renders the buffer always ends up showing the newest line.

    Usage:
        buffer = LogBuffer()
        buffer.fragment_appended.connect(view.append_markup)
        buffer.content_reset.connect(view.replace_markup)
        buffer.scroll_to_bottom_requested.connect(view.scroll_to_bottom)
    """

    fragment_appended = pyqtSignal(str)  # The new fragment only
    content_reset = pyqtSignal(str)      # Replacement content (may be empty)
    content_changed = pyqtSignal()       # Any change; read .text for content
    scroll_to_bottom_requested = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._fragments: List[str] = []
        self._text_cache: Optional[str] = ""

    @property
    def text(self) -> str:
        """Accumulated markup as a single string."""
        if self._text_cache is None:
            self._text_cache = "".join(self._fragments)
        return self._text_cache

    @property
    def fragments(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def is_empty(self) -> bool:
        return not self._fragments

    def append(self, markup: str) -> None:
        """Append a markup fragment and notify subscribers."""
        if not markup:
            return
        self._fragments.append(markup)
        self._text_cache = None

        self.fragment_appended.emit(markup)
        self.content_changed.emit()
        self.scroll_to_bottom_requested.emit()

    def reset(self, placeholder: str = "") -> None:
        """
        Replace the buffer with an empty value or a placeholder message.

        Args:
            placeholder: Already-sanitized markup shown instead of log content
        """
        self._fragments = [placeholder] if placeholder else []
        self._text_cache = placeholder
        logger.debug(f"Log buffer reset ({len(placeholder)} chars of placeholder)")

        self.content_reset.emit(placeholder)
        self.content_changed.emit()
        self.scroll_to_bottom_requested.emit()
