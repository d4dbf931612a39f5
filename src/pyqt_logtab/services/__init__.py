"""
Service layer for log tabs.

Lifecycle coordination between job status, log path and the tail watcher.
"""

from .log_tab_controller import LogTabController

# Also export as module
from . import log_tab_controller

__all__ = [
    "LogTabController",
    "log_tab_controller",
]
