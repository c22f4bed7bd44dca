"""Enumeration of a real directory into path entries.

The tree engine never touches the filesystem; this module is the folder picker
used by the command-line interface. It produces entries whose first segment is
the folder's own name, exactly as the engine expects.
"""

import logging
import os
from pathlib import Path
from typing import List, Tuple

from treegenius.types import PathEntry, PathType

logger = logging.getLogger(__name__)


def collect_entries(directory: PathType) -> Tuple[str, List[PathEntry]]:
    """List every file below ``directory`` with its size.

    Symbolic links to directories are not followed. Entries that cannot be
    read are logged and skipped.

    Args:
        directory: The folder to enumerate.

    Returns:
        The root name (the folder's name) and one entry per file, with paths of the
        form ``"<root name>/<relative path>"`` using ``/`` separators, in sorted order.

    Raises:
        FileNotFoundError: If the directory does not exist.
        NotADirectoryError: If the path is not a directory.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     project = Path(tmpdir) / "project"
        ...     (project / "src").mkdir(parents=True)
        ...     _ = (project / "src" / "main.py").write_text("print()")
        ...     collect_entries(project)
        ('project', [PathEntry(path='project/src/main.py', size=7)])
    """
    root_path = Path(directory)
    if not root_path.exists():
        raise FileNotFoundError(f"Root path does not exist: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root_path}")

    # The filesystem root has no name of its own
    root_name = root_path.resolve().name or "root"
    entries: List[PathEntry] = []

    def on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory: %s", error)

    for current, dirnames, filenames in os.walk(root_path, onerror=on_error):
        dirnames.sort()
        relative_dir = os.path.relpath(current, root_path)
        for filename in sorted(filenames):
            file_path = os.path.join(current, filename)
            try:
                size = os.stat(file_path).st_size
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", file_path, e)
                continue
            relative = filename if relative_dir == os.curdir else os.path.join(relative_dir, filename)
            entries.append(PathEntry(f"{root_name}/{relative}".replace("\\", "/"), size))

    logger.debug("Collected %d entries below %s", len(entries), root_path)
    return root_name, entries
