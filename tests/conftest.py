"""pytest configuration and fixtures for pyqt-logtab tests."""

import os
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def wait_until(qapp):
    """Pump the event loop until predicate() is true or timeout (seconds) expires."""
    def _wait(predicate, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            qapp.processEvents()
            if predicate():
                return True
            time.sleep(0.01)
        qapp.processEvents()
        return predicate()
    return _wait


@pytest.fixture
def pump(qapp):
    """Process events for a fixed time (seconds), e.g. to let late events arrive."""
    def _pump(duration=0.3):
        deadline = time.monotonic() + duration
        while time.monotonic() < deadline:
            qapp.processEvents()
            time.sleep(0.01)
    return _pump


@pytest.fixture
def log_file(tmp_path):
    """An empty log file path ready for appends."""
    path = tmp_path / "job.log"
    path.write_text("")
    return path


@pytest.fixture(autouse=True)
def fast_polling():
    """Use a short poll interval so tailing tests stay quick."""
    from pyqt_logtab.protocols import LogTabConfig, set_log_tab_config

    set_log_tab_config(LogTabConfig(poll_interval_ms=20))
    yield
    set_log_tab_config(None)


def append(path, text):
    """Append text to path and flush it to disk."""
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)
        f.flush()


@pytest.fixture
def append_to():
    """Fixture form of append()."""
    return append
