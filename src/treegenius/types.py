from enum import Enum
from os import PathLike
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeType(Enum):
    """Enumeration of node kinds in a path tree.

    Attributes:
        FILE: Leaf node carrying a byte size
        DIRECTORY: Interior node holding named children
    """

    FILE = "file"
    DIRECTORY = "dir"


class PathEntry(NamedTuple):
    """A single enumerated path and its size in bytes.

    The first segment of ``path`` is the root folder name; it is stripped
    before the entry is inserted into a tree.

    Example:
        >>> entry = PathEntry("project/src/main.py", 120)
        >>> entry.path, entry.size
        ('project/src/main.py', 120)
    """

    path: str
    size: int = 0
