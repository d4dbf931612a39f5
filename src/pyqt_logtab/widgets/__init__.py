"""
Log tab widgets.

Thin PyQt6 views over the core buffer and the lifecycle controller.
"""

from .log_display import LogDisplay
from .status_banner import StatusBanner, get_status_color
from .log_tab import LogTab

__all__ = [
    "LogDisplay",
    "StatusBanner",
    "get_status_color",
    "LogTab",
]
