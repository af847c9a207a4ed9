"""
Traversal filtering policy for filescout.

A PathFilter answers two questions during a walk: should this directory be
descended into, and is this file small enough for content operations.
"""

from typing import Iterable

from ..models.config import SearchConfig


HIDDEN_MARKER = "."


class PathFilter:
    """
    Decides which directories are descended into and which files are
    eligible for content extraction or scanning.

    The skip set is explicit configuration captured at construction.
    """

    def __init__(self, skip_directories: Iterable[str], content_max_bytes: int,
                 skip_hidden: bool = True, case_sensitive: bool = True):
        """
        Initialize the filter.

        Args:
            skip_directories: Directory names that are never descended into
            content_max_bytes: Largest file size eligible for content operations
            skip_hidden: Whether names starting with the hidden marker are pruned
            case_sensitive: Whether skip names are compared case-sensitively
        """
        if content_max_bytes <= 0:
            raise ValueError("content_max_bytes must be positive")

        self.case_sensitive = case_sensitive
        self.skip_hidden = skip_hidden
        self.content_max_bytes = content_max_bytes
        self.skip_directories = frozenset(self._fold(name) for name in skip_directories)

    @classmethod
    def from_config(cls, config: SearchConfig, live: bool = False) -> 'PathFilter':
        """Build the indexed or live filter profile from configuration."""
        filters = config.filters
        if live:
            return cls(filters.live_skip_directories, config.limits.live_content_max_bytes,
                       skip_hidden=filters.skip_hidden, case_sensitive=filters.live_case_sensitive)
        return cls(filters.index_skip_directories, config.limits.index_content_max_bytes,
                   skip_hidden=filters.skip_hidden, case_sensitive=filters.index_case_sensitive)

    def _fold(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    def should_descend(self, dir_name: str) -> bool:
        """Return True if a directory with this name should be traversed."""
        if self.skip_hidden and dir_name.startswith(HIDDEN_MARKER):
            return False
        return self._fold(dir_name) not in self.skip_directories

    def is_content_eligible(self, size_bytes: int) -> bool:
        """Return True if a file of this size may be read for content."""
        return 0 <= size_bytes <= self.content_max_bytes

    def __repr__(self) -> str:
        return (f"PathFilter(skip={len(self.skip_directories)}, "
                f"content_max_bytes={self.content_max_bytes}, skip_hidden={self.skip_hidden})")
