"""Path list to text tree conversion utilities.

This package turns a flat list of file paths (as produced by enumerating a
directory) into a hierarchy and renders it as a classic tree, ASCII tree,
minimal, indent-only, emoji-annotated or structured (JSON) text.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treegenius")
except PackageNotFoundError:
    __version__ = "unknown"
