"""Protocol for revealing a job's files in the platform file browser."""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices

logger = logging.getLogger(__name__)


class FileRevealProvider(Protocol):
    """Protocol for showing a file in the operating system's file browser."""

    def reveal(self, path: Union[str, Path]) -> bool:
        """Show path to the user. Return True if the shell accepted the request."""
        ...


class DesktopFileRevealer:
    """Opens the folder containing a file through QDesktopServices."""

    def reveal(self, path: Union[str, Path]) -> bool:
        folder = Path(path).parent
        opened = QDesktopServices.openUrl(QUrl.fromLocalFile(str(folder)))
        if not opened:
            logger.warning(f"Could not open folder in file browser: {folder}")
        return opened


_file_reveal_provider: Optional[FileRevealProvider] = None


def register_file_reveal_provider(provider: Optional[FileRevealProvider]) -> None:
    """Register a global file reveal provider (None restores the default)."""
    global _file_reveal_provider
    _file_reveal_provider = provider


def get_file_reveal_provider() -> FileRevealProvider:
    """Get the registered file reveal provider, or the desktop default."""
    if _file_reveal_provider is None:
        return DesktopFileRevealer()
    return _file_reveal_provider
