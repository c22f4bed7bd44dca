"""Node representation for entries in a path tree."""

from typing import Dict, Iterator, Optional

from anytree import NodeMixin

from treegenius.types import NodeType


class TreeNode(NodeMixin):  # type: ignore
    """Base class for a named entry in a path tree.

    Uses anytree.NodeMixin for the parent/child links, so depth, ancestors and
    the anytree iterators are available on every node. The ``kind`` attribute
    is the explicit tag telling files and directories apart.

    Attributes:
        name (str): The segment name of the entry.
        kind (NodeType): FILE or DIRECTORY.
        parent (Optional[DirectoryNode]): The containing directory.
    """

    kind: NodeType

    def __init__(self, name: str, parent: Optional["DirectoryNode"] = None) -> None:
        super().__init__()
        self.name = name
        if parent is not None:
            parent.add_child(self)

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeType.DIRECTORY

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class FileNode(TreeNode):
    """Leaf node representing a file and its size in bytes.

    Example:
        >>> node = FileNode("main.py", 120)
        >>> node.kind, node.file_size, node.is_dir
        (<NodeType.FILE: 'file'>, 120, False)
    """

    kind = NodeType.FILE

    def __init__(self, name: str, size: int = 0, parent: Optional["DirectoryNode"] = None) -> None:
        super().__init__(name, parent)
        self.file_size = size


class DirectoryNode(TreeNode):
    """Interior node representing a directory.

    Children are unique by name and are looked up through an index dictionary
    rather than by scanning ``children``. The order of ``children`` reflects
    insertion only; renderers sort entries themselves.

    Example:
        >>> root = DirectoryNode("")
        >>> src = DirectoryNode("src", parent=root)
        >>> _ = FileNode("main.py", 10, parent=src)
        >>> root.get_child("src") is src
        True
        >>> [node.name for node in src.iter_children()]
        ['main.py']
    """

    kind = NodeType.DIRECTORY

    def __init__(self, name: str, parent: Optional["DirectoryNode"] = None) -> None:
        self._index: Dict[str, TreeNode] = {}
        super().__init__(name, parent)

    def get_child(self, name: str) -> Optional[TreeNode]:
        """Return the child with the given name, or None if there is none."""
        return self._index.get(name)

    def add_child(self, node: TreeNode) -> TreeNode:
        """Attach a node as a child of this directory.

        Args:
            node: The node to attach.

        Returns:
            The attached node.

        Raises:
            ValueError: If a child with the same name already exists.
        """
        if node.name in self._index:
            raise ValueError(f"Duplicate entry {node.name!r} in directory {self.name!r}")
        self._index[node.name] = node
        node.parent = self
        return node

    def iter_children(self) -> Iterator[TreeNode]:
        return iter(self._index.values())
