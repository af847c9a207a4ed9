"""
Filesystem walker for filescout.

This module provides the depth-first traversal shared by the indexer and the
live search engine. Directories are filtered before descent so pruned
subtrees are never visited, entries are visited in sorted order so repeated
walks over an unchanged tree yield the same sequence, and failures are
confined to the directory or file that caused them.
"""

import os
import stat
from pathlib import Path
from typing import Dict, List, Iterator, Optional
import logging

from ..errors import RootNotFoundError
from ..models.search_results import FileRecord
from .path_filter import PathFilter


logger = logging.getLogger(__name__)


def resolve_root(root: str) -> Path:
    """
    Resolve a traversal root to an absolute directory path.

    Raises:
        RootNotFoundError: If the root does not exist or is not a directory
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise RootNotFoundError(str(root_path))
    return root_path


class FSWalker:
    """
    Filesystem walker that traverses a directory tree and yields file records.

    Access-denied and I/O errors while listing a directory skip that subtree;
    an error while reading a file's metadata skips that file. Both are logged
    as warnings and kept in the walker's error list.
    """

    def __init__(self, path_filter: PathFilter):
        """
        Initialize the filesystem walker.

        Args:
            path_filter: Filter deciding which directories are descended into
        """
        self.path_filter = path_filter
        self._stats = self._empty_stats()
        self._errors: List[str] = []

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_scanned': 0,
            'directories_traversed': 0,
            'directories_skipped': 0,
            'errors': 0
        }

    def walk(self, root: str) -> Iterator[FileRecord]:
        """
        Walk the tree below root and yield a record for every regular file.

        Args:
            root: Root directory to walk

        Yields:
            FileRecord objects in depth-first, name-sorted order

        Raises:
            RootNotFoundError: If root does not exist (raised before the first record)
        """
        root_path = resolve_root(root)
        logger.debug(f"Walking directory tree: {root_path}")
        return self._walk_directory(root_path)

    def _walk_directory(self, root_path: Path) -> Iterator[FileRecord]:
        for current_dir, subdirs, files in os.walk(root_path, onerror=self._on_walk_error):
            self._stats['directories_traversed'] += 1

            # Prune in place so os.walk never enters skipped subtrees
            kept = []
            for dir_name in sorted(subdirs):
                if self.path_filter.should_descend(dir_name):
                    kept.append(dir_name)
                else:
                    self._stats['directories_skipped'] += 1
                    logger.debug(f"Skipping directory: {os.path.join(current_dir, dir_name)}")
            subdirs[:] = kept

            for filename in sorted(files):
                record = self._create_record(os.path.join(current_dir, filename), filename)
                if record is not None:
                    self._stats['files_scanned'] += 1
                    yield record

    def _on_walk_error(self, error: OSError) -> None:
        if isinstance(error, PermissionError):
            message = f"Skipping directory (access denied): {error.filename}"
        else:
            message = f"Skipping directory (I/O error): {error.filename} - {error.strerror or error}"
        logger.warning(message)
        self._stats['directories_skipped'] += 1
        self._record_error(message)

    def _create_record(self, file_path: str, filename: str) -> Optional[FileRecord]:
        """
        Create a FileRecord from a file's metadata.

        Returns:
            FileRecord, or None for non-regular files and files that cannot be read
        """
        try:
            stat_result = os.stat(file_path)
        except OSError as e:
            message = f"Could not read metadata of {file_path}: {e}"
            logger.warning(message)
            self._record_error(message)
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            return None

        return FileRecord(
            file_name=filename,
            absolute_path=file_path,
            size_bytes=stat_result.st_size,
            last_modified_millis=stat_result.st_mtime_ns // 1_000_000
        )

    def _record_error(self, message: str) -> None:
        self._stats['errors'] += 1
        self._errors.append(message)

    def get_errors(self) -> List[str]:
        """Get the messages of every error encountered since the last reset."""
        return list(self._errors)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the filesystem walking operation.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters and error list."""
        self._stats = self._empty_stats()
        self._errors = []
