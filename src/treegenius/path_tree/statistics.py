"""Aggregate counts gathered while building a path tree."""

from dataclasses import dataclass
from typing import Dict


@dataclass
class TreeStatistics:
    """Directory, file and byte totals of a tree.

    The counters are incremented once per newly created node by the builder.
    The implicit root directory is never counted.

    Example:
        >>> stats = TreeStatistics()
        >>> stats.record_directory()
        >>> stats.record_file(30)
        >>> stats.as_dict()
        {'directoryCount': 1, 'fileCount': 1, 'totalBytes': 30}
    """

    directory_count: int = 0
    file_count: int = 0
    total_bytes: int = 0

    def record_directory(self) -> None:
        self.directory_count += 1

    def record_file(self, size: int) -> None:
        self.file_count += 1
        self.total_bytes += size

    def as_dict(self) -> Dict[str, int]:
        """Return the statistics record with its external field names."""
        return {
            "directoryCount": self.directory_count,
            "fileCount": self.file_count,
            "totalBytes": self.total_bytes,
        }
