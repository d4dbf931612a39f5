"""
Core log tailing utilities.

Classification, sanitization, tailing and buffering of job log output.
No dependency on the widget or service layers.
"""

from .exceptions import LogTailError, MissingLogFileError
from .log_patterns import (
    LOG_TIMESTAMP_PATTERN,
    ERROR_LABEL,
    PRIMARY_LABEL,
    LogPattern,
    ClassifiedLine,
    build_log_patterns,
    classify,
    classify_line,
    primary_logger_name,
)
from .markup import LOG_TEXT_TAG, sanitize_html, encode_line, markup_line
from .job_status import JobStatus, StatusSummary, last_error_line, summarize_status
from .file_tail import LogTailer, TailSession, FileTailWatcher
from .log_buffer import LogBuffer
from .rich_text_appender import RichTextAppender

__all__ = [
    "LogTailError",
    "MissingLogFileError",
    "LOG_TIMESTAMP_PATTERN",
    "ERROR_LABEL",
    "PRIMARY_LABEL",
    "LogPattern",
    "ClassifiedLine",
    "build_log_patterns",
    "classify",
    "classify_line",
    "primary_logger_name",
    "LOG_TEXT_TAG",
    "sanitize_html",
    "encode_line",
    "markup_line",
    "JobStatus",
    "StatusSummary",
    "last_error_line",
    "summarize_status",
    "LogTailer",
    "TailSession",
    "FileTailWatcher",
    "LogBuffer",
    "RichTextAppender",
]
