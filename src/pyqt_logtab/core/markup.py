"""
Markup encoding for classified log lines.

Log text is untrusted: a job can print anything, including text that looks
like HTML. Every line goes through ``sanitize_html`` before it reaches the
display, and the only markup that survives is a ``<span>`` carrying a
``class`` attribute.
"""

import html
from html.parser import HTMLParser
from typing import Dict, FrozenSet, List, Optional, Sequence

from pyqt_logtab.core.log_patterns import LogPattern, classify

# --- Module-level constants ---
LOG_TEXT_TAG = "span"
ALLOWED_HTML_OPTIONS: Dict[str, FrozenSet[str]] = {
    LOG_TEXT_TAG: frozenset({"class"}),
}
# Elements whose text content is dropped along with the element
NON_TEXT_TAGS = frozenset({"script", "style", "textarea", "option"})


class LogMarkupSanitizer(HTMLParser):
    """
    HTML filter keeping only allow-listed elements and attributes.

    Disallowed tags are removed but their text is kept (escaped), except for
    NON_TEXT_TAGS whose content is dropped. Comments, doctypes and processing
    instructions are dropped.
    """

    def __init__(self, allowed: Dict[str, FrozenSet[str]] = None):
        super().__init__(convert_charrefs=True)
        self._allowed = ALLOWED_HTML_OPTIONS if allowed is None else allowed
        self._parts: List[str] = []
        self._open_tags: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in NON_TEXT_TAGS:
            self._skip_depth += 1
            return
        if self._skip_depth or tag not in self._allowed:
            return

        allowed_attrs = self._allowed[tag]
        rendered = "".join(
            f' {name}="{html.escape(value or "", quote=True)}"'
            for name, value in attrs
            if name in allowed_attrs
        )
        self._parts.append(f"<{tag}{rendered}>")
        self._open_tags.append(tag)

    def handle_endtag(self, tag):
        if tag in NON_TEXT_TAGS:
            if self._skip_depth:
                self._skip_depth -= 1
            return
        if self._skip_depth or tag not in self._open_tags:
            return

        # Close any allowed elements left open inside this one
        while self._open_tags:
            open_tag = self._open_tags.pop()
            self._parts.append(f"</{open_tag}>")
            if open_tag == tag:
                break

    def handle_data(self, data):
        if self._skip_depth:
            return
        self._parts.append(html.escape(data, quote=False))

    def result(self) -> str:
        """Finish parsing and return the sanitized markup."""
        self.close()
        while self._open_tags:
            self._parts.append(f"</{self._open_tags.pop()}>")
        return "".join(self._parts)


def sanitize_html(markup: str, allowed: Optional[Dict[str, FrozenSet[str]]] = None) -> str:
    """Strip everything except allow-listed markup (default: span/class)."""
    if not markup:
        return ""
    sanitizer = LogMarkupSanitizer(allowed)
    sanitizer.feed(markup)
    return sanitizer.result()


def encode_line(line: str, label: Optional[str] = None) -> str:
    """
    Encapsulate text in html, assigning a class when a label is given.

    The line is sanitized on its own with nothing allowed, then wrapped, so
    markup-like text inside the line can neither close the envelope nor add
    elements or attributes.

    Args:
        line: Plaintext log line
        label: Classification label used as the span class

    Returns:
        Sanitized markup
    """
    text = sanitize_html(line, allowed={})
    if label:
        return f'<{LOG_TEXT_TAG} class="{html.escape(label, quote=True)}">{text}</{LOG_TEXT_TAG}>'
    return text


def markup_line(line: str, patterns: Sequence[LogPattern]) -> str:
    """Classify a line and return its sanitized markup."""
    return encode_line(line, classify(line, patterns))
