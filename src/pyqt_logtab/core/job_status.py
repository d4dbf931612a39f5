"""Job status values and the summary shown alongside a job's log."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# --- Module-level constants ---
ERROR_PLACEHOLDER = "Error (see Log for details)"
SUCCESS_MESSAGE = "Model Complete"


class JobStatus(str, Enum):
    """Status of the external job, as reported by the job runner."""
    NOT_STARTED = "not-started"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    CANCELED = "canceled"

    @classmethod
    def coerce(cls, value: Union["JobStatus", str, None]) -> "JobStatus":
        """Map runner-supplied values (None, plain strings) onto JobStatus."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NOT_STARTED
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.NOT_STARTED

    @property
    def is_finished(self) -> bool:
        return self in (JobStatus.SUCCESS, JobStatus.ERROR, JobStatus.CANCELED)


@dataclass(frozen=True)
class StatusSummary:
    """What the host should show next to the log for the current status."""
    status: JobStatus
    message: Optional[str] = None
    can_cancel: bool = False
    can_open_workspace: bool = False


def last_error_line(stderr_text: Optional[str], placeholder: str = ERROR_PLACEHOLDER) -> str:
    """
    Return the last non-blank line of stderr output.

    Trailing empty and whitespace-only lines are skipped. When nothing is
    left (no stderr captured, e.g. a job reloaded from history) the
    placeholder is returned instead.
    """
    if stderr_text:
        for line in reversed(stderr_text.splitlines()):
            if line.strip():
                return line.rstrip()
    return placeholder


def summarize_status(
    status: Union[JobStatus, str, None],
    stderr_text: Optional[str] = None,
    error_placeholder: str = ERROR_PLACEHOLDER,
    success_message: str = SUCCESS_MESSAGE,
) -> StatusSummary:
    """
    Derive the status summary for a job.

    Args:
        status: Current job status
        stderr_text: Accumulated stderr of the current or most recent run
        error_placeholder: Message used when stderr has no usable line
        success_message: Completion message

    Returns:
        StatusSummary for the host to render
    """
    status = JobStatus.coerce(status)
    if status == JobStatus.RUNNING:
        return StatusSummary(status, can_cancel=True)
    if status == JobStatus.ERROR:
        return StatusSummary(
            status,
            message=last_error_line(stderr_text, error_placeholder),
            can_open_workspace=True,
        )
    if status == JobStatus.SUCCESS:
        return StatusSummary(status, message=success_message, can_open_workspace=True)
    return StatusSummary(status)
