from abc import ABC, abstractmethod
from typing import Sequence, Union

from treegenius.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path entry exclusion rules.

    Rules are consulted once per path entry, with the entry already split into its
    segments (the root folder segment removed). An entry that is excluded is dropped
    entirely: no node is created for any of its segments and it contributes nothing
    to the tree statistics.

    Only ``exclude`` is required. TreeBuilder never calls anything else, so a rule
    type that filters by some fixed criterion need not override ``load_rules`` or
    ``add_rule``; the command-line ignore options call those and fail loudly for
    rule types that do not support them.

    Example:
        >>> from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules
        >>> rules = SegmentExclusionRules([".git"])
        >>> rules.exclude(["sub", ".git", "config"])
        True
        >>> rules.exclude(["sub", "main.py"])
        False
    """

    @abstractmethod
    def exclude(self, segments: Sequence[str]) -> bool:
        """
        Determine if a path entry should be excluded.

        Args:
            segments (Sequence[str]): The path segments of the entry, without the root
                folder segment.

        Returns:
            bool: True if the entry should be dropped, False if it should be kept.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Rule types that don't support file operations use this default implementation.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
