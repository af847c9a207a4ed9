"""
Indexed search engine for filescout.

Queries run against the IndexSnapshot produced by the most recent successful
build. A rebuild constructs a complete new snapshot and swaps it in under a
lock, so a reader sees either the old index or the new one, never a
partially built one. A failed build leaves the previous snapshot in place.
"""

import logging
import threading
from typing import List, Optional

from ..models.config import SearchConfig
from ..models.index_status import IndexStatistics, STATUS_NOT_BUILT, STATUS_READY
from ..models.search_results import FileRecord
from .indexer import Indexer, IndexSnapshot
from .ranking import merge_unique, rank_by_name


logger = logging.getLogger(__name__)


class IndexedSearchEngine:
    """
    Name, prefix, content and combined queries over the in-memory index.

    Queries issued before the first successful build return an empty list
    and log a warning.
    """

    def __init__(self, config: Optional[SearchConfig] = None,
                 indexer: Optional[Indexer] = None):
        self.config = config or SearchConfig()
        self.indexer = indexer or Indexer(self.config)
        self._snapshot: Optional[IndexSnapshot] = None
        self._swap_lock = threading.Lock()
        self._build_lock = threading.Lock()

    def build_index(self, root: str) -> IndexSnapshot:
        """
        Build a fresh index for root and make it current.

        Raises:
            RootNotFoundError: If root does not exist; the current index is kept
        """
        with self._build_lock:
            snapshot = self.indexer.build(root)
            with self._swap_lock:
                self._snapshot = snapshot
        return snapshot

    def _current(self) -> Optional[IndexSnapshot]:
        with self._swap_lock:
            snapshot = self._snapshot
        if snapshot is None:
            logger.warning("Index not built yet. Build the index before searching.")
        return snapshot

    def is_indexed(self) -> bool:
        with self._swap_lock:
            return self._snapshot is not None

    @property
    def root_directory(self) -> Optional[str]:
        with self._swap_lock:
            return self._snapshot.root_directory if self._snapshot else None

    @staticmethod
    def _hydrate(snapshot: IndexSnapshot, paths: List[str]) -> List[FileRecord]:
        records = []
        for path in paths:
            record = snapshot.catalog.get(path)
            if record is not None:
                records.append(record)
        return records

    def search_by_name(self, term: str) -> List[FileRecord]:
        """Files whose name equals term, case-insensitively."""
        snapshot = self._current()
        if snapshot is None:
            return []
        return self._hydrate(snapshot, snapshot.name_index.search_exact(term))

    def search_by_name_prefix(self, term: str) -> List[FileRecord]:
        """Files whose name starts with term, case-insensitively."""
        snapshot = self._current()
        if snapshot is None:
            return []
        return self._hydrate(snapshot, snapshot.name_index.search_by_prefix(term))

    def search_by_content(self, term: str) -> List[FileRecord]:
        """Files whose stored content contains term, case-insensitively."""
        snapshot = self._current()
        if snapshot is None:
            return []
        return self._scan_content(snapshot, term)

    @staticmethod
    def _scan_content(snapshot: IndexSnapshot, term: str) -> List[FileRecord]:
        # Linear scan over every stored text; there is no inverted index
        needle = term.lower()
        paths = [path for path, content in snapshot.content_store.items()
                 if needle in content.lower()]
        return IndexedSearchEngine._hydrate(snapshot, paths)

    def search_by_name_and_content(self, term: str) -> List[FileRecord]:
        """
        Union of the exact name, name prefix and content results.

        Each path appears once. Results are ordered exact names first, then
        prefix matches, then content-only matches; within a tier by
        lowercased name, then path.
        """
        snapshot = self._current()
        if snapshot is None:
            return []

        exact = self._hydrate(snapshot, snapshot.name_index.search_exact(term))
        prefix = self._hydrate(snapshot, snapshot.name_index.search_by_prefix(term))
        content = self._scan_content(snapshot, term)
        return rank_by_name(merge_unique(exact, prefix, content), term)

    def get_snapshot(self) -> Optional[IndexSnapshot]:
        """Get the current snapshot without logging when none exists."""
        with self._swap_lock:
            return self._snapshot

    def get_statistics(self) -> IndexStatistics:
        """Summarize the current index."""
        snapshot = self.get_snapshot()
        if snapshot is None:
            return IndexStatistics(status=STATUS_NOT_BUILT)

        return IndexStatistics(
            total_files=len(snapshot.catalog),
            text_files=len(snapshot.content_store),
            total_size_bytes=snapshot.total_size_bytes(),
            root_directory=snapshot.root_directory,
            status=STATUS_READY,
            built_at=snapshot.built_at
        )
