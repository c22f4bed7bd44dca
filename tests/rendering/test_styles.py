"""Tests for the style table."""

import pytest

from treegenius.rendering.styles import FILE_ICON, FOLDER_ICON, STYLE_TABLE, get_style


def test_all_styles_registered():
    assert set(STYLE_TABLE) == {"classic", "ascii", "minimal", "indent", "emoji", "structured"}


@pytest.mark.parametrize(
    "name, branch, last_branch, vertical, space",
    [
        ("classic", "├── ", "└── ", "│   ", "    "),
        ("ascii", "|-- ", "`-- ", "|   ", "    "),
        ("minimal", "+ ", "+ ", "  ", "  "),
        ("emoji", "├── ", "└── ", "│   ", "    "),
    ],
)
def test_connector_glyphs(name, branch, last_branch, vertical, space):
    style = get_style(name)
    assert style.connector(is_last=False) == branch
    assert style.connector(is_last=True) == last_branch
    assert style.continuation(is_last=False) == vertical
    assert style.continuation(is_last=True) == space


def test_indent_style_is_whitespace_only():
    style = get_style("indent")
    assert style.connector(is_last=False) == style.connector(is_last=True) == "  "
    assert style.continuation(is_last=False) == style.continuation(is_last=True) == "  "


def test_only_emoji_has_icons():
    assert get_style("emoji").folder_icon == FOLDER_ICON
    assert get_style("emoji").file_icon == FILE_ICON
    for name in ("classic", "ascii", "minimal", "indent"):
        assert get_style(name).folder_icon == get_style(name).file_icon == ""


def test_structured_flag():
    assert get_style("structured").structured
    assert not get_style("classic").structured


def test_unknown_style():
    with pytest.raises(ValueError, match="Unknown tree style"):
        get_style("json")
