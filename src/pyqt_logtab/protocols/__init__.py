"""
Extension points for host applications.

Configuration and provider registries an application sets once at
startup to customize log tabs.
"""

from .log_tab_config import LogTabConfig, set_log_tab_config, get_log_tab_config
from .file_reveal import (
    FileRevealProvider,
    DesktopFileRevealer,
    register_file_reveal_provider,
    get_file_reveal_provider,
)

__all__ = [
    "LogTabConfig",
    "set_log_tab_config",
    "get_log_tab_config",
    "FileRevealProvider",
    "DesktopFileRevealer",
    "register_file_reveal_provider",
    "get_file_reveal_provider",
]
