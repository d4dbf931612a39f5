"""
Line classification for job log output.

Each appended log line is tested against an ordered tuple of labelled
patterns. The first pattern that matches decides the label, which the
markup encoder turns into a CSS class on the rendered line.

Expected line convention:
    2020-10-16 07:13:04,325 carbon.execute() ...
    <timestamp> <logger name> <message>
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# --- Module-level constants ---
LOG_TIMESTAMP_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3}"

ERROR_LABEL = "log-error"
PRIMARY_LABEL = "log-primary"

# Traceback headers, "ValueError: ..." style lines, the ERROR level token,
# and indented continuation lines of a traceback.
_ERROR_RE = re.compile(r"(Traceback)|(^\s*[A-Z]\w*Error)|(ERROR)|(^\s+)")


@dataclass(frozen=True)
class LogPattern:
    """A classification label and the regex that selects it."""
    label: str
    matcher: "re.Pattern[str]"

    def matches(self, line: str) -> bool:
        return self.matcher.search(line) is not None


@dataclass(frozen=True)
class ClassifiedLine:
    """A raw log line with the label it was assigned, if any."""
    raw_text: str
    label: Optional[str] = None


def primary_logger_name(module_name: str) -> str:
    """Return the logger name a module logs under (last dotted component)."""
    return f"{module_name}".split(".")[-1]


def build_log_patterns(
    primary_module_name: Optional[str],
    error_label: str = ERROR_LABEL,
    primary_label: str = PRIMARY_LABEL,
) -> Tuple[LogPattern, ...]:
    """
    Build the ordered pattern tuple for a job's log.

    The error pattern always comes first so that an error logged by the
    primary module still renders as an error.

    Args:
        primary_module_name: Dotted module name of the job's entry point,
            e.g. "natcap.invest.carbon". Empty or None skips the primary pattern.
        error_label: Label for error lines
        primary_label: Label for lines logged by the primary module

    Returns:
        Tuple of LogPattern in priority order
    """
    patterns = [LogPattern(error_label, _ERROR_RE)]

    logger_name = primary_logger_name(primary_module_name) if primary_module_name else ""
    if logger_name:
        primary_re = re.compile(f"{LOG_TIMESTAMP_PATTERN} {re.escape(logger_name)}")
        patterns.append(LogPattern(primary_label, primary_re))

    return tuple(patterns)


def classify(line: str, patterns: Sequence[LogPattern]) -> Optional[str]:
    """Return the label of the first pattern matching line, or None."""
    if not line:
        return None
    for pattern in patterns:
        if pattern.matches(line):
            return pattern.label
    return None


def classify_line(line: str, patterns: Sequence[LogPattern]) -> ClassifiedLine:
    """Classify line and keep the raw text alongside its label."""
    return ClassifiedLine(raw_text=line, label=classify(line, patterns))
