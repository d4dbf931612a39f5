"""
PyQt6 Color Scheme for log tabs

Centralized colors for the log display and status banner, with light/dark
variants and JSON configuration. Log line colors are delivered to the
display as a QTextDocument stylesheet keyed by classification label.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Tuple

from PyQt6.QtGui import QColor

from pyqt_logtab.core.log_patterns import ERROR_LABEL, PRIMARY_LABEL

logger = logging.getLogger(__name__)


@dataclass
class ColorScheme:
    """
    Color scheme for log tabs with semantic color names.

    All colors are RGB tuples; use to_hex() or to_qcolor() to convert.
    """

    # ========== BASE UI COLORS ==========

    panel_bg: Tuple[int, int, int] = (30, 30, 30)          # #1e1e1e - Log pane background
    border_color: Tuple[int, int, int] = (85, 85, 85)      # #555555 - Borders
    text_primary: Tuple[int, int, int] = (255, 255, 255)   # #ffffff - Primary text
    text_secondary: Tuple[int, int, int] = (204, 204, 204) # #cccccc - Secondary text/labels

    # ========== STATUS COLORS ==========

    status_success: Tuple[int, int, int] = (0, 255, 0)     # Job complete
    status_warning: Tuple[int, int, int] = (255, 170, 0)   # Canceled
    status_error: Tuple[int, int, int] = (255, 0, 0)       # Job failed
    status_info: Tuple[int, int, int] = (0, 170, 255)      # Job running

    # ========== LOG LINE COLORS ==========

    log_text_color: Tuple[int, int, int] = (204, 204, 204)    # Unclassified lines
    log_error_color: Tuple[int, int, int] = (255, 85, 85)     # Tracebacks, ERROR lines
    log_primary_color: Tuple[int, int, int] = (255, 255, 255) # Lines from the job's own module
    log_primary_bold: bool = True

    def to_qcolor(self, color_tuple: Tuple[int, int, int]) -> QColor:
        """
        Convert RGB tuple to QColor object.

        Args:
            color_tuple: RGB color tuple (r, g, b)

        Returns:
            QColor: Qt color object
        """
        return QColor(*color_tuple)

    def to_hex(self, color_tuple: Tuple[int, int, int]) -> str:
        """
        Convert RGB tuple to hex color string.

        Args:
            color_tuple: RGB color tuple (r, g, b)

        Returns:
            str: Hex color string (e.g., "#ff0000")
        """
        r, g, b = color_tuple
        return f"#{r:02x}{g:02x}{b:02x}"

    def log_stylesheet(self, error_label: str = ERROR_LABEL, primary_label: str = PRIMARY_LABEL) -> str:
        """
        Build the document stylesheet for classified log lines.

        Args:
            error_label: Class name used for error lines
            primary_label: Class name used for primary-module lines

        Returns:
            str: CSS suitable for QTextDocument.setDefaultStyleSheet
        """
        primary_weight = "bold" if self.log_primary_bold else "normal"
        return (
            f"body {{ color: {self.to_hex(self.log_text_color)}; }}\n"
            f".{error_label} {{ color: {self.to_hex(self.log_error_color)}; }}\n"
            f".{primary_label} {{ color: {self.to_hex(self.log_primary_color)}; "
            f"font-weight: {primary_weight}; }}\n"
        )

    @classmethod
    def create_dark_theme(cls) -> 'ColorScheme':
        """
        Create a dark theme variant.

        This is the default theme, with slightly brighter status colors.

        Returns:
            ColorScheme: Dark theme color scheme
        """
        return cls(
            log_error_color=(255, 100, 100),    # Brighter red
            text_secondary=(220, 220, 220),     # Slightly brighter secondary text
            status_success=(0, 255, 100),       # Slightly brighter green
        )

    @classmethod
    def create_light_theme(cls) -> 'ColorScheme':
        """
        Create a light theme variant with darker colors for light backgrounds.

        Returns:
            ColorScheme: Light theme color scheme
        """
        return cls(
            panel_bg=(255, 255, 255),           # White log pane
            border_color=(180, 180, 180),       # Medium gray borders
            text_primary=(0, 0, 0),             # Black primary text
            text_secondary=(80, 80, 80),        # Dark gray secondary text
            status_success=(0, 150, 0),         # Darker green
            status_warning=(200, 100, 0),       # Darker orange
            status_error=(200, 0, 0),           # Darker red
            status_info=(0, 100, 200),          # Darker blue
            log_text_color=(60, 60, 60),        # Dark gray log text
            log_error_color=(180, 20, 40),      # Darker red
            log_primary_color=(0, 0, 0),        # Black
        )

    @classmethod
    def load_color_scheme_from_config(cls, config_path: str = None) -> 'ColorScheme':
        """
        Load color scheme from external configuration file.

        Args:
            config_path: Path to JSON config file (optional)

        Returns:
            ColorScheme: Loaded color scheme or default if file not found
        """
        if config_path and Path(config_path).exists():
            try:
                with open(config_path, 'r') as f:
                    config = json.load(f)

                known = {f.name for f in fields(cls)}
                scheme_kwargs = {}
                for key, value in config.items():
                    if key not in known:
                        continue
                    if isinstance(value, list) and len(value) == 3:
                        scheme_kwargs[key] = tuple(value)
                    elif isinstance(value, bool):
                        scheme_kwargs[key] = value

                return cls(**scheme_kwargs)

            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load color scheme from {config_path}: {e}")

        return cls()  # Return default scheme
