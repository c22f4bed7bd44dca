"""Rendering configuration for a tree generation pass.

TreeConfig is immutable: every change produces a new object, and a new
configuration always triggers a full rebuild from the original path list.
Mappings use the camelCase keys of the saved settings format
(``maxDepth``, ``showFiles`` ...) but snake_case field names are accepted too.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Mapping

from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules
from treegenius.rendering.styles import STYLE_TABLE

DEFAULT_IGNORES: FrozenSet[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".idea",
        ".vscode",
        "dist",
        "build",
        "coverage",
        "__pycache__",
        ".DS_Store",
    }
)

STYLE_NAMES = tuple(STYLE_TABLE)

_CAMEL_KEYS = {
    "max_depth": "maxDepth",
    "style": "style",
    "ignores": "ignores",
    "show_files": "showFiles",
    "show_sizes": "showSizes",
    "trailing_slash": "trailingSlash",
    "show_stats": "showStats",
}


@dataclass(frozen=True)
class TreeConfig:
    """Options controlling filtering and rendering of one pass.

    Attributes:
        max_depth (int): Directories at this depth or deeper are not listed. The root
            label is depth 0 and is always printed.
        style (str): One of classic, ascii, minimal, indent, emoji, structured.
        ignores (FrozenSet[str]): Segment names that drop any entry containing them.
        show_files (bool): Whether file lines are rendered. Files are always counted.
        show_sizes (bool): Whether sizes are appended to file lines and the root line.
        trailing_slash (bool): Whether ``/`` is appended to directory names.
        show_stats (bool): Display hint for the consumer; the engine ignores it.

    Example:
        >>> config = TreeConfig.from_mapping({"maxDepth": 3, "style": "ascii", "unknown": 1})
        >>> config.max_depth, config.style
        (3, 'ascii')
        >>> config.with_ignore("target").ignores >= {"target", ".git"}
        True
    """

    max_depth: int = 10
    style: str = "classic"
    ignores: FrozenSet[str] = field(default_factory=lambda: DEFAULT_IGNORES)
    show_files: bool = True
    show_sizes: bool = False
    trailing_slash: bool = False
    show_stats: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        if self.style not in STYLE_TABLE:
            raise ValueError(f"Invalid style: {self.style!r}. Must be one of: {', '.join(STYLE_NAMES)}")
        if isinstance(self.ignores, str):
            raise ValueError("ignores must be a collection of segment names, not a string")
        # Accept any iterable of names but store an immutable set
        object.__setattr__(self, "ignores", frozenset(self.ignores))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TreeConfig":
        """Create a config by merging a mapping over the defaults.

        Keys may be camelCase or snake_case; unknown keys are ignored.

        Raises:
            ValueError: If a recognized key holds an invalid value.
        """
        known = {f.name for f in fields(cls)}
        by_camel = {camel: snake for snake, camel in _CAMEL_KEYS.items()}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = by_camel.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)

    def to_mapping(self) -> Dict[str, Any]:
        """Return the config as a JSON-ready mapping with camelCase keys."""
        data = asdict(self)
        data["ignores"] = sorted(self.ignores)
        return {_CAMEL_KEYS[name]: value for name, value in data.items()}

    def with_ignore(self, name: str) -> "TreeConfig":
        """Return a copy that also ignores ``name``. Blank or known names are no-ops."""
        if not name.strip() or name in self.ignores:
            return self
        return replace(self, ignores=self.ignores | {name})

    def without_ignore(self, name: str) -> "TreeConfig":
        if name not in self.ignores:
            return self
        return replace(self, ignores=self.ignores - {name})

    def with_options(self, **changes: Any) -> "TreeConfig":
        return replace(self, **changes)

    def exclusion_rules(self) -> SegmentExclusionRules:
        """Build the segment exclusion rules for this config's ignore set."""
        return SegmentExclusionRules(self.ignores)
