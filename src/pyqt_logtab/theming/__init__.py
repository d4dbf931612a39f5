"""
Theming for log tabs.

Color schemes and the stylesheet applied to classified log lines.
"""

from .color_scheme import ColorScheme

__all__ = [
    "ColorScheme",
]
