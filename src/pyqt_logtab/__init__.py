"""
pyqt-logtab: live job log tailing and display for PyQt6.

Watches the log file of a long-running external job, classifies each
appended line, renders it as sanitized rich text and keeps the view
scrolled to the newest output while the job runs.

Architecture:
- Tier 1 (Core): Classification, sanitization, tailing thread, display buffer
- Tier 2 (Protocols): Configuration and provider registries
- Tier 3 (Services): Lifecycle controller bound to job status and log path
- Tier 4 (Widgets): Log display, status banner, composite log tab

Key Features:
- Ordered first-match line classification (errors before primary module output)
- Allow-list sanitization: only <span class="..."> survives
- Session-scoped tailing; late events from stopped sessions are dropped
- Scroll-to-newest signal on every buffer change
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
