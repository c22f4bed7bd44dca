"""Cooperative construction of a path tree from a flat list of path entries.

This module provides the TreeBuilder class, which folds (path, size) entries into
a DirectoryNode hierarchy while accumulating TreeStatistics. Building yields to
the event loop after every batch of entries and checks a cancellation token at
each of those points, so large inputs never monopolize the loop.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple, Union

from treegenius.cancellation import CancellationToken
from treegenius.exceptions import BuildFailedError
from treegenius.exclusion_rules.base_rules import BaseExclusionRules
from treegenius.path_tree.statistics import TreeStatistics
from treegenius.path_tree.tree_node import DirectoryNode, FileNode, TreeNode
from treegenius.types import PathEntry

logger = logging.getLogger(__name__)

DEFAULT_BUILD_BATCH_SIZE = 2000

EntryLike = Union[PathEntry, Tuple[str, int]]


def split_entry_path(path: str) -> Tuple[List[str], bool]:
    """Split an entry path into its segments below the root folder.

    Backslashes are treated as separators and empty segments are dropped. The
    first segment (the root folder name) is discarded.

    Args:
        path: The entry path, e.g. ``"project/src/main.py"``.

    Returns:
        A pair of the remaining segments and a flag telling whether the path
        names a directory (it ends with a separator).

    Example:
        >>> split_entry_path("project/src/main.py")
        (['src', 'main.py'], False)
        >>> split_entry_path("project\\\\docs\\\\")
        (['docs'], True)
        >>> split_entry_path("project")
        ([], False)
    """
    normalized = path.replace("\\", "/")
    segments = [segment for segment in normalized.split("/") if segment]
    return segments[1:], normalized.endswith("/")


def _validate_size(size: object, path: str) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"Size of {path!r} must be an integer, got {type(size).__name__}")
    if size < 0:
        raise ValueError(f"Invalid size {size} for {path!r}")
    return size


class TreeBuilder:
    """Builds a directory hierarchy and its statistics from path entries.

    Each entry's path is split into segments, the root folder segment removed,
    and the exclusion rules consulted. Excluded entries are dropped entirely.
    Kept entries extend the tree one segment at a time, creating directories for
    every segment but the last and a file (carrying the entry size) for the last.
    Statistics are incremented only when a node is created, so entries sharing a
    directory prefix never count that directory twice.

    When a segment was first created as a file and a later entry needs it as a
    directory (or the reverse), the first type wins: the conflicting remainder
    of the later entry is dropped without error.

    Building is an awaitable operation. After every ``batch_size`` entries the
    builder yields to the event loop and checks the cancellation token.

    Attributes:
        exclusion_rules (Optional[BaseExclusionRules]): Rules for dropping entries.
        cancellation_token (CancellationToken): Token checked at every batch boundary.
        batch_size (int): Number of entries processed between suspension points.

    Example:
        >>> import asyncio
        >>> from treegenius.exclusion_rules.segment_rules import SegmentExclusionRules
        >>> builder = TreeBuilder(SegmentExclusionRules([".git"]))
        >>> root, stats = asyncio.run(builder.build([
        ...     ("root/a.txt", 10),
        ...     ("root/sub/b.txt", 20),
        ...     ("root/sub/.git/x", 5),
        ... ]))
        >>> stats.as_dict()
        {'directoryCount': 1, 'fileCount': 2, 'totalBytes': 30}
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        cancellation_token: Optional[CancellationToken] = None,
        batch_size: int = DEFAULT_BUILD_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.exclusion_rules = exclusion_rules
        self.cancellation_token = cancellation_token or CancellationToken()
        self.batch_size = batch_size

    async def build(self, entries: Iterable[EntryLike]) -> Tuple[DirectoryNode, TreeStatistics]:
        """Fold the entries into a fresh tree.

        Args:
            entries: Path entries, either PathEntry values or ``(path, size)`` pairs.

        Returns:
            The implicit root directory and the statistics of the built tree.

        Raises:
            PassCancelledError: If the cancellation token is set at a suspension point.
                No partial tree is returned.
            BuildFailedError: If inserting an entry raises; the original exception is
                available as ``cause``.
        """
        root = DirectoryNode("")
        stats = TreeStatistics()
        self.cancellation_token.raise_if_cancelled()

        processed = 0
        for entry in entries:
            try:
                self._insert(root, stats, entry)
            except Exception as e:
                logger.error("Aborting build at entry %r: %s", entry, e)
                raise BuildFailedError(e) from e

            processed += 1
            if processed % self.batch_size == 0:
                await asyncio.sleep(0)
                self.cancellation_token.raise_if_cancelled()

        logger.debug(
            "Built tree from %d entries: %d directories, %d files, %d bytes",
            processed,
            stats.directory_count,
            stats.file_count,
            stats.total_bytes,
        )
        return root, stats

    def _insert(self, root: DirectoryNode, stats: TreeStatistics, entry: EntryLike) -> None:
        """Insert a single entry below root, updating stats for each new node."""
        path, size = entry
        segments, is_dir_entry = split_entry_path(path)
        if not segments:
            logger.debug("Skipping entry without path segments: %r", path)
            return

        if self.exclusion_rules is not None and self.exclusion_rules.exclude(segments):
            return

        directory_names = segments if is_dir_entry else segments[:-1]
        if not is_dir_entry:
            size = _validate_size(size, path)

        current = root
        for name in directory_names:
            child: Optional[TreeNode] = current.get_child(name)
            if child is None:
                child = DirectoryNode(name, parent=current)
                stats.record_directory()
            elif not isinstance(child, DirectoryNode):
                logger.debug("Dropping %r: %r is already a file", path, name)
                return
            current = child

        if is_dir_entry:
            return

        file_name = segments[-1]
        existing = current.get_child(file_name)
        if existing is None:
            FileNode(file_name, size, parent=current)
            stats.record_file(size)
        elif existing.is_dir:
            logger.debug("Dropping file %r: %r is already a directory", path, file_name)
