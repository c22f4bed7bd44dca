"""Exclusion rules matching whole path segments by exact name."""

from os import PathLike
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Sequence, Set, Union

from treegenius.types import PathType

from .base_rules import BaseExclusionRules


class SegmentExclusionRules(BaseExclusionRules):
    """Exclusion rules that drop any entry containing an ignored segment name.

    Matching is a case-sensitive, exact comparison of each segment against the
    configured names. No glob or substring matching is performed: ignoring
    ``"test"`` drops ``src/test/a.py`` but keeps ``src/tests/a.py`` and
    ``src/latest.py``.

    Attributes:
        rules (FrozenSet[str]): The ignored segment names.

    Example:
        >>> rules = SegmentExclusionRules(["node_modules"])
        >>> rules.exclude(["web", "node_modules", "react", "index.js"])
        True
        >>> rules.exclude(["web", "node_modules_backup.txt"])
        False
        >>> rules.add_rule("Build")
        >>> rules.exclude(["build", "out.o"])
        False
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        """Initialize the rules with an optional collection of segment names.

        Args:
            names: Segment names to ignore. Blank names are skipped.
        """
        self._names: Set[str] = set()
        if names is not None:
            for name in names:
                self.add_rule(name)

    @property
    def rules(self) -> FrozenSet[str]:
        return frozenset(self._names)

    def has_rules(self) -> bool:
        """Check whether any segment name is configured."""
        return bool(self._names)

    def exclude(self, segments: Sequence[str]) -> bool:
        """Check whether any of the segments is an ignored name.

        Args:
            segments: The path segments of the entry, without the root folder segment.

        Returns:
            bool: True if at least one segment equals an ignored name.

        Example:
            >>> SegmentExclusionRules([".git"]).exclude(["a", ".gitignore"])
            False
        """
        if not self._names:
            return False
        return any(segment in self._names for segment in segments)

    def add_rule(self, rule: str) -> None:
        """Add a segment name to ignore.

        The name is kept exactly as given, so it only matches segments spelled
        the same way, whitespace included. Empty or whitespace-only names are ignored.

        Args:
            rule: The segment name.
        """
        if rule.strip():
            self._names.add(rule)

    def remove_rule(self, rule: str) -> None:
        """Stop ignoring a segment name. Removing an unknown name is a no-op."""
        self._names.discard(rule)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load segment names from one or more files, one name per line.

        Blank lines and lines starting with ``#`` are skipped. Only the line
        terminator is removed from each name.

        Args:
            rules_files: Path(s) to the file(s) containing segment names.

        Raises:
            FileNotFoundError: If any rules file does not exist.

        Example:
            >>> import os
            >>> import tempfile
            >>> with tempfile.NamedTemporaryFile(mode='w', delete=False) as f:
            ...     _ = f.write('# generated output\\ndist\\n\\ncoverage\\n')
            >>> rules = SegmentExclusionRules()
            >>> rules.load_rules(f.name)
            >>> sorted(rules.rules)
            ['coverage', 'dist']
            >>> os.unlink(f.name)
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            with path.open("r", encoding="utf-8") as f:
                for line in f:
                    name = line.rstrip("\r\n")
                    if name.strip() and not name.lstrip().startswith("#"):
                        self.add_rule(name)
