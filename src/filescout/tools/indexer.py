"""
Index builder for filescout.

One build is a single synchronous depth-first pass over a directory tree. It
produces a fresh IndexSnapshot holding the name index, the catalog of file
records and the store of extracted content; nothing from an earlier build is
carried over.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..errors import ExtractionError
from ..models.config import SearchConfig
from ..models.search_results import FileRecord
from .extractors import ContentExtractor
from .fs_walker import FSWalker, resolve_root
from .name_index import NameIndex
from .path_filter import PathFilter


logger = logging.getLogger(__name__)


@dataclass
class IndexSnapshot:
    """
    The structures produced by one build.

    Attributes:
        root_directory: Absolute root the snapshot was built from
        name_index: Trie of lowercased file names to paths
        catalog: Absolute path to FileRecord, one entry per indexed file
        content_store: Absolute path to extracted text, content-indexed files only
        built_at: When the build finished
        directories_skipped: Directories pruned or skipped after an error
        errors: Per-file and per-subtree problems met during the build
        duration_seconds: Wall-clock build time
    """
    root_directory: str
    name_index: NameIndex = field(default_factory=NameIndex)
    catalog: Dict[str, FileRecord] = field(default_factory=dict)
    content_store: Dict[str, str] = field(default_factory=dict)
    built_at: Optional[datetime] = None
    directories_skipped: int = 0
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    def total_size_bytes(self) -> int:
        return sum(record.size_bytes for record in self.catalog.values())


class Indexer:
    """
    Builds IndexSnapshots.

    Every regular file that survives directory pruning is cataloged and
    name-indexed. Files with a content-bearing extension that fit under the
    index content ceiling are also passed to the content extractor; a failed
    extraction is logged and the file stays name-indexed.
    """

    def __init__(self, config: Optional[SearchConfig] = None,
                 extractor: Optional[ContentExtractor] = None):
        self.config = config or SearchConfig()
        self.path_filter = PathFilter.from_config(self.config, live=False)
        self.extractor = extractor or ContentExtractor(self.config.content)

    def build(self, root: str) -> IndexSnapshot:
        """
        Walk root and build a new snapshot.

        Raises:
            RootNotFoundError: If root does not exist
        """
        root_path = resolve_root(root)
        start = time.time()
        logger.info(f"Building index for: {root_path}")

        walker = FSWalker(self.path_filter)
        snapshot = IndexSnapshot(root_directory=str(root_path))

        for record in walker.walk(str(root_path)):
            self._index_file(snapshot, record)
            if len(snapshot.catalog) % self.config.limits.progress_interval == 0:
                logger.debug(f"Indexed {len(snapshot.catalog)} files...")

        stats = walker.get_stats()
        snapshot.directories_skipped = stats['directories_skipped']
        snapshot.errors = walker.get_errors() + snapshot.errors
        snapshot.built_at = datetime.now()
        snapshot.duration_seconds = time.time() - start

        logger.info(f"Index built successfully. Total files indexed: {len(snapshot.catalog)} "
                    f"({len(snapshot.content_store)} with content)")
        return snapshot

    def _index_file(self, snapshot: IndexSnapshot, record: FileRecord) -> None:
        snapshot.name_index.insert(record.file_name, record.absolute_path)
        snapshot.catalog[record.absolute_path] = record

        if not self.extractor.supports(record.file_name):
            return

        if not self.path_filter.is_content_eligible(record.size_bytes):
            logger.debug(f"Skipping content of large file: {record.absolute_path} ({record.size_bytes} bytes)")
            return

        try:
            snapshot.content_store[record.absolute_path] = self.extractor.extract(record.absolute_path)
        except ExtractionError as e:
            logger.warning(str(e))
            snapshot.errors.append(str(e))

