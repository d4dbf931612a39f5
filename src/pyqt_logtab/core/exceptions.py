"""Log tailing exceptions."""

from pathlib import Path


class LogTailError(Exception):
    """Base class for errors raised while tailing a log file."""


class MissingLogFileError(LogTailError):
    """Raised when a log file does not exist at watch-start time."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Log file does not exist: {self.path}")
