"""Glyph sets used to decorate rendered tree lines.

Each line-drawing style defines four decoration strings: the connector for an
entry that has later siblings (``branch``), the connector for the last entry of a
directory (``last_branch``), and the prefix continuations placed under a
non-last entry (``vertical``) and under a last entry (``space``). The indent
style has no connectors and nests entries with ``indent_unit`` whitespace only.
The structured style has no glyphs at all; it is serialized as JSON.
"""

from dataclasses import dataclass
from typing import Dict

FOLDER_ICON = "\U0001f4c1 "
FILE_ICON = "\U0001f4c4 "


@dataclass(frozen=True)
class TreeStyle:
    """Decoration strings for one rendering style.

    Attributes:
        name (str): Style identifier.
        branch (str): Connector before a non-last entry.
        last_branch (str): Connector before the last entry of a directory.
        vertical (str): Prefix continuation below a non-last entry.
        space (str): Prefix continuation below a last entry.
        folder_icon (str): Glyph placed before directory names, if any.
        file_icon (str): Glyph placed before file names, if any.
        indent_unit (str): Whitespace per nesting level for connector-less styles.
        structured (bool): Whether the style is serialized as data instead of lines.
    """

    name: str
    branch: str = ""
    last_branch: str = ""
    vertical: str = ""
    space: str = ""
    folder_icon: str = ""
    file_icon: str = ""
    indent_unit: str = ""
    structured: bool = False

    def connector(self, is_last: bool) -> str:
        if self.indent_unit:
            return self.indent_unit
        return self.last_branch if is_last else self.branch

    def continuation(self, is_last: bool) -> str:
        if self.indent_unit:
            return self.indent_unit
        return self.space if is_last else self.vertical


CLASSIC = TreeStyle("classic", branch="├── ", last_branch="└── ", vertical="│   ", space="    ")
ASCII = TreeStyle("ascii", branch="|-- ", last_branch="`-- ", vertical="|   ", space="    ")
MINIMAL = TreeStyle("minimal", branch="+ ", last_branch="+ ", vertical="  ", space="  ")
INDENT = TreeStyle("indent", indent_unit="  ")
EMOJI = TreeStyle(
    "emoji",
    branch=CLASSIC.branch,
    last_branch=CLASSIC.last_branch,
    vertical=CLASSIC.vertical,
    space=CLASSIC.space,
    folder_icon=FOLDER_ICON,
    file_icon=FILE_ICON,
)
STRUCTURED = TreeStyle("structured", structured=True)

STYLE_TABLE: Dict[str, TreeStyle] = {style.name: style for style in (CLASSIC, ASCII, MINIMAL, INDENT, EMOJI, STRUCTURED)}


def get_style(name: str) -> TreeStyle:
    """Look up a style by identifier.

    Args:
        name: One of the keys of STYLE_TABLE.

    Returns:
        The matching TreeStyle.

    Raises:
        ValueError: If the style is unknown.

    Example:
        >>> get_style("ascii").last_branch
        '`-- '
        >>> get_style("emoji").branch == get_style("classic").branch
        True
    """
    try:
        return STYLE_TABLE[name]
    except KeyError:
        raise ValueError(f"Unknown tree style: {name!r}. Must be one of: {', '.join(STYLE_TABLE)}")
