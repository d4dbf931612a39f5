"""Utility for appending log markup to QTextEdit with proper cursor/scroll handling."""

from PyQt6.QtWidgets import QTextEdit
from PyQt6.QtGui import QTextCursor

# Keeps indentation of traceback lines; newlines are converted to <br>
_PRESERVE_WHITESPACE = "<span style='white-space: pre-wrap;'>{}</span>"


def to_rich_text(markup: str) -> str:
    """Convert buffer markup (plain newlines) to Qt rich text."""
    return _PRESERVE_WHITESPACE.format(markup.replace("\r\n", "\n").replace("\n", "<br>"))


class RichTextAppender:
    """
    Utility for appending sanitized log markup to a QTextEdit.

    Usage:
        appender = RichTextAppender(self.log_text)
        appender.append_markup('<span class="log-error">Traceback ...</span>\\n')
        appender.scroll_to_bottom()
    """

    def __init__(self, text_edit: QTextEdit):
        self._text_edit = text_edit

    def append_markup(self, markup: str):
        """
        Append markup at end of document.

        Args:
            markup: Sanitized markup fragment
        """
        if not markup:
            return
        cursor = self._text_edit.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        self._text_edit.setTextCursor(cursor)

        self._text_edit.insertHtml(to_rich_text(markup))

    def replace_markup(self, markup: str):
        """Replace all content with markup (empty clears)."""
        self.clear()
        self.append_markup(markup)

    def clear(self):
        """Clear all content."""
        self._text_edit.clear()

    def scroll_to_bottom(self):
        """Scroll text edit to bottom."""
        scrollbar = self._text_edit.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())
