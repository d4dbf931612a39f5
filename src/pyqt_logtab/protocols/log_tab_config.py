"""Configuration for log tabs.

Provides hooks for applications to customize tailing and status text.
"""

from dataclasses import dataclass
from typing import Optional

from pyqt_logtab.core.file_tail import DEFAULT_ENCODING, POLL_INTERVAL_MS, STOP_WAIT_MS
from pyqt_logtab.core.job_status import ERROR_PLACEHOLDER, SUCCESS_MESSAGE
from pyqt_logtab.core.log_patterns import ERROR_LABEL, PRIMARY_LABEL


@dataclass
class LogTabConfig:
    """Configuration for log tab behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        poll_interval_ms: Delay between polls of the tailed file
        stop_wait_ms: How long stopping a session waits for its thread
        encoding: Encoding of the log file (undecodable bytes are replaced)
        error_label: CSS class for error lines
        primary_label: CSS class for lines from the primary module
        missing_file_message: Placeholder shown when the log file is missing;
            "{path}" is replaced with the log path
        error_placeholder: Error summary when no stderr line is available
        success_message: Summary shown when the job completed
    """

    poll_interval_ms: int = POLL_INTERVAL_MS
    stop_wait_ms: int = STOP_WAIT_MS
    encoding: str = DEFAULT_ENCODING
    error_label: str = ERROR_LABEL
    primary_label: str = PRIMARY_LABEL
    missing_file_message: str = "Logfile is missing: \n{path}"
    error_placeholder: str = ERROR_PLACEHOLDER
    success_message: str = SUCCESS_MESSAGE


# Global config instance (set by application)
_log_tab_config: Optional[LogTabConfig] = None


def set_log_tab_config(config: Optional[LogTabConfig]) -> None:
    """Set the global log tab configuration.

    Args:
        config: LogTabConfig instance, or None to restore defaults
    """
    global _log_tab_config
    _log_tab_config = config


def get_log_tab_config() -> LogTabConfig:
    """Get the current log tab configuration.

    Returns:
        Current LogTabConfig or default if not set
    """
    if _log_tab_config is None:
        return LogTabConfig()
    return _log_tab_config
