"""Tests for log tab widgets."""

import pytest

from pyqt_logtab.core import JobStatus, LogBuffer, StatusSummary


def test_log_display_renders_buffer(qapp):
    from pyqt_logtab.widgets import LogDisplay

    buffer = LogBuffer()
    buffer.append("before bind\n")
    display = LogDisplay()
    display.bind_buffer(buffer)
    assert "before bind" in display.toPlainText()

    buffer.append('<span class="log-error">ValueError: x</span>\n')
    text = display.toPlainText()
    assert "before bind" in text
    assert "ValueError: x" in text

    buffer.reset("Logfile is missing")
    assert display.toPlainText().strip() == "Logfile is missing"


def test_log_display_scrolls_to_newest(qapp):
    from pyqt_logtab.widgets import LogDisplay

    buffer = LogBuffer()
    display = LogDisplay()
    display.resize(300, 80)
    display.show()
    display.bind_buffer(buffer)

    scrollbar = display.verticalScrollBar()
    for i in range(200):
        buffer.append(f"line {i}\n")
        assert scrollbar.value() == scrollbar.maximum()
    display.close()


def test_log_display_unbind(qapp):
    from pyqt_logtab.widgets import LogDisplay

    buffer = LogBuffer()
    display = LogDisplay()
    display.bind_buffer(buffer)
    display.unbind_buffer()
    display.unbind_buffer()

    buffer.append("ignored\n")
    assert "ignored" not in display.toPlainText()
    assert display.buffer is None


def test_status_banner_error(qapp):
    from pyqt_logtab.widgets import StatusBanner

    banner = StatusBanner()
    banner.set_summary(StatusSummary(JobStatus.ERROR, "ValueError: bad input", can_open_workspace=True))

    assert banner.message == "ValueError: bad input"
    assert banner.cancel_button.isHidden()
    assert not banner.workspace_button.isHidden()


def test_status_banner_running_cancel(qapp):
    from pyqt_logtab.widgets import StatusBanner

    banner = StatusBanner()
    cancelled = []
    banner.cancel_requested.connect(lambda: cancelled.append(True))
    banner.set_summary(StatusSummary(JobStatus.RUNNING, can_cancel=True))

    assert not banner.cancel_button.isHidden()
    assert banner.workspace_button.isHidden()
    banner.cancel_button.click()
    assert cancelled == [True]


def test_status_banner_hidden_before_start(qapp):
    from pyqt_logtab.widgets import StatusBanner

    banner = StatusBanner()
    assert banner.isHidden()


@pytest.mark.parametrize("status", list(JobStatus))
def test_status_colors_resolve(qapp, status):
    from pyqt_logtab.theming import ColorScheme
    from pyqt_logtab.widgets import get_status_color

    assert get_status_color(status, ColorScheme()).startswith("#")


def test_log_tab_wires_controller(qapp, log_file, append_to, wait_until):
    from pyqt_logtab.widgets import LogTab

    append_to(log_file, "2020-10-16 07:13:04,325 carbon hello\n")
    tab = LogTab("natcap.invest.carbon", log_file=log_file, job_status="running")
    tab.show()
    try:
        assert tab.controller.is_watching
        assert wait_until(lambda: "carbon hello" in tab.display.toPlainText())

        tab.set_stderr_text("ValueError: bad input\n")
        tab.set_job_status("error")
        assert not tab.controller.is_watching
        assert tab.banner.message == "ValueError: bad input"
    finally:
        tab.close()
    assert not tab.controller.is_mounted


def test_log_tab_open_workspace(qapp, log_file):
    from pyqt_logtab.widgets import LogTab

    revealed = []

    class Recorder:
        def reveal(self, path):
            revealed.append(path)
            return True

    tab = LogTab("carbon", log_file=log_file, job_status="success", reveal_provider=Recorder())
    try:
        tab.banner.workspace_button.click()
        assert revealed == [str(log_file)]
    finally:
        tab.cleanup()


def test_log_tab_forwards_cancel(qapp):
    from pyqt_logtab.widgets import LogTab

    tab = LogTab("carbon", job_status="running")
    cancelled = []
    tab.cancel_requested.connect(lambda: cancelled.append(True))
    tab.banner.cancel_button.click()
    assert cancelled == [True]
    tab.cleanup()
