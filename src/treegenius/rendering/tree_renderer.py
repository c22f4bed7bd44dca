"""Rendering of path trees as decorated text or structured JSON.

This module provides the TreeRenderer class, which walks a DirectoryNode
hierarchy in a deterministic order and produces either tree-style text lines
(similar to the Unix ``tree`` command) or a JSON serialization of the hierarchy.
Rendering yields to the event loop after every batch of visited entries and
checks the pass's cancellation token at each of those points.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from anytree import PreOrderIter

from treegenius.cancellation import CancellationToken
from treegenius.config import TreeConfig
from treegenius.exceptions import PassCancelledError, RenderFailedError
from treegenius.path_tree.statistics import TreeStatistics
from treegenius.path_tree.tree_node import DirectoryNode, FileNode, TreeNode
from treegenius.rendering.size_format import format_size
from treegenius.rendering.styles import TreeStyle, get_style
from treegenius.types import NodeType

logger = logging.getLogger(__name__)

DEFAULT_RENDER_BATCH_SIZE = 500


def entry_sort_key(node: TreeNode) -> Tuple[bool, str, str]:
    """Sort key placing directories before files, then names in case-aware order.

    Names compare case-insensitively; names differing only in case put the
    lower-case spelling first.

    Example:
        >>> root = DirectoryNode("")
        >>> for name in ("b.txt", "A.txt", "a.txt"):
        ...     _ = FileNode(name, parent=root)
        >>> _ = DirectoryNode("zeta", parent=root)
        >>> [node.name for node in sorted(root.iter_children(), key=entry_sort_key)]
        ['zeta', 'a.txt', 'A.txt', 'b.txt']
    """
    return node.kind is NodeType.FILE, node.name.casefold(), node.name.swapcase()


class TreeRenderer:
    """Serializes a path tree according to a TreeConfig.

    For every style except ``structured`` the output is one line per rendered
    entry, the root label first. Each line is composed of the prefix inherited
    from its ancestors, the style's connector, an optional icon, the name, an
    optional trailing slash (directories) and an optional size suffix (files).
    Within a directory, subdirectories come before files and each group is in
    case-aware name order. A directory's entries are listed only while its depth
    is below ``max_depth``; the root label (depth 0) is always printed.

    The ``structured`` style serializes the whole hierarchy as JSON instead,
    keyed by the root label, with directories as ``{"type": "dir", "children": ...}``
    and files as ``{"type": "file", "size": n}``.

    Attributes:
        config (TreeConfig): Options for this rendering.
        style (TreeStyle): The glyph set resolved from ``config.style``.
        cancellation_token (CancellationToken): Token checked at every batch boundary.
        batch_size (int): Number of visited entries between suspension points.

    Example:
        >>> import asyncio
        >>> root = DirectoryNode("")
        >>> sub = DirectoryNode("sub", parent=root)
        >>> _ = FileNode("b.txt", 20, parent=sub)
        >>> _ = FileNode("a.txt", 10, parent=root)
        >>> text = asyncio.run(TreeRenderer(TreeConfig()).render(root, "root"))
        >>> print(text, end="")
        root
        ├── sub
        │   └── b.txt
        └── a.txt
    """

    def __init__(
        self,
        config: TreeConfig,
        cancellation_token: Optional[CancellationToken] = None,
        batch_size: int = DEFAULT_RENDER_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.config = config
        self.style: TreeStyle = get_style(config.style)
        self.cancellation_token = cancellation_token or CancellationToken()
        self.batch_size = batch_size
        self._visited = 0

    async def render(self, root: DirectoryNode, root_name: str, statistics: Optional[TreeStatistics] = None) -> str:
        """Render the tree below ``root`` with ``root_name`` as its label.

        Args:
            root: The implicit root directory produced by the builder.
            root_name: Label printed on the first line (or used as the top-level JSON key).
            statistics: Statistics of the same build, used for the aggregate size on the
                root line. Computed from the tree when omitted.

        Returns:
            The rendered text, terminated by a newline.

        Raises:
            PassCancelledError: If the cancellation token is set at a suspension point.
            RenderFailedError: If an unexpected error occurs while rendering.
        """
        self._visited = 0
        self.cancellation_token.raise_if_cancelled()
        try:
            if self.style.structured:
                structure = {root_name: await self._structure(root)}
                return json.dumps(structure, indent=2, ensure_ascii=False) + "\n"

            lines = [self._root_line(root, root_name, statistics)]
            await self._render_directory(root, "", 0, lines)
            return "\n".join(lines) + "\n"
        except PassCancelledError:
            raise
        except Exception as e:
            logger.error("Rendering %r failed: %s", root_name, e)
            raise RenderFailedError(e) from e

    def _root_line(self, root: DirectoryNode, root_name: str, statistics: Optional[TreeStatistics]) -> str:
        line = f"{self.style.folder_icon}{root_name}"
        if self.config.trailing_slash:
            line += "/"
        if self.config.show_sizes:
            if statistics is not None:
                total = statistics.total_bytes
            else:
                total = sum(node.file_size for node in PreOrderIter(root) if isinstance(node, FileNode))
            line += f" ({format_size(total)})"
        return line

    def _format_entry(self, node: TreeNode, prefix: str, is_last: bool) -> str:
        """Compose one line: prefix, connector, icon, name, slash and size."""
        parts = [prefix, self.style.connector(is_last)]
        if isinstance(node, FileNode):
            parts += [self.style.file_icon, node.name]
            if self.config.show_sizes:
                parts.append(f" ({format_size(node.file_size)})")
        else:
            parts += [self.style.folder_icon, node.name]
            if self.config.trailing_slash:
                parts.append("/")
        return "".join(parts)

    async def _render_directory(self, directory: DirectoryNode, prefix: str, depth: int, lines: List[str]) -> None:
        if depth >= self.config.max_depth:
            return

        children = sorted(directory.iter_children(), key=entry_sort_key)
        if self.config.show_files:
            entries = children
        else:
            entries = [child for child in children if child.is_dir]
            # Hidden files still count as visited work
            await self._advance(len(children) - len(entries))

        last_index = len(entries) - 1
        for index, node in enumerate(entries):
            is_last = index == last_index
            lines.append(self._format_entry(node, prefix, is_last))
            await self._advance()
            if isinstance(node, DirectoryNode):
                await self._render_directory(node, prefix + self.style.continuation(is_last), depth + 1, lines)

    async def _structure(self, directory: DirectoryNode) -> Dict[str, Any]:
        children: Dict[str, Any] = {}
        for node in sorted(directory.iter_children(), key=entry_sort_key):
            if isinstance(node, DirectoryNode):
                children[node.name] = await self._structure(node)
            else:
                children[node.name] = {"type": "file", "size": node.file_size}
            await self._advance()
        return {"type": "dir", "children": children}

    async def _advance(self, count: int = 1) -> None:
        """Count visited entries, yielding and checking cancellation at each batch boundary."""
        if count <= 0:
            return
        before = self._visited
        self._visited += count
        if self._visited // self.batch_size > before // self.batch_size:
            await asyncio.sleep(0)
            self.cancellation_token.raise_if_cancelled()
