"""Tests for theming system."""

import json


def test_color_scheme_creation():
    """Test ColorScheme instantiation."""
    from pyqt_logtab.theming import ColorScheme

    scheme = ColorScheme()
    assert scheme.to_hex((255, 0, 16)) == "#ff0010"


def test_log_stylesheet_uses_labels():
    from pyqt_logtab.theming import ColorScheme

    scheme = ColorScheme.create_light_theme()
    css = scheme.log_stylesheet("bad", "mine")
    assert ".bad { color: #b41428; }" in css
    assert ".mine" in css and "font-weight: bold" in css


def test_load_color_scheme_from_config(tmp_path):
    from pyqt_logtab.theming import ColorScheme

    path = tmp_path / "colors.json"
    path.write_text(json.dumps({
        "log_error_color": [1, 2, 3],
        "log_primary_bold": False,
        "unknown_color": [9, 9, 9],
    }))
    scheme = ColorScheme.load_color_scheme_from_config(str(path))
    assert scheme.log_error_color == (1, 2, 3)
    assert scheme.log_primary_bold is False


def test_load_color_scheme_falls_back(tmp_path):
    from pyqt_logtab.theming import ColorScheme

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert ColorScheme.load_color_scheme_from_config(str(bad)) == ColorScheme()
    assert ColorScheme.load_color_scheme_from_config(None) == ColorScheme()
