"""
Live search engine for filescout.

Nothing is kept between calls: every query walks the filesystem below a
caller-supplied root. Names can be matched by substring, regular expression
or multi-term ("fuzzy") containment; content is matched line by line in
text-like files under the live content ceiling.
"""

import os
import re
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional

from ..errors import PatternError
from ..models.config import SearchConfig
from ..models.search_results import FileRecord, MatchKind, SearchResult
from .fs_walker import FSWalker
from .path_filter import PathFilter
from .ranking import rank_by_name, rank_by_size, rank_fuzzy


logger = logging.getLogger(__name__)


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a case-insensitive search pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


class LiveSearchEngine:
    """
    Filesystem-walking search with no persistent state.

    Traversal is single-threaded. Content scanning of the candidate files is
    spread over a bounded thread pool and the per-file outcomes are merged
    back in traversal order before ranking, so results do not depend on
    thread scheduling.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.path_filter = PathFilter.from_config(self.config, live=True)
        self.text_extensions = frozenset(self.config.content.live_text_extensions)
        self.max_workers = self.config.limits.max_concurrent or os.cpu_count() or 1
        self._last_scanned = 0

    def get_last_scanned(self) -> int:
        """Number of files examined by the most recent call."""
        return self._last_scanned

    def _walk(self, root: str) -> List[FileRecord]:
        walker = FSWalker(self.path_filter)
        records = list(walker.walk(root))
        self._last_scanned = walker.get_stats()['files_scanned']
        return records

    def search_by_name(self, term: str, root: str, use_regex: bool = False,
                       use_fuzzy: bool = False) -> List[SearchResult]:
        """
        Find files whose name matches term.

        Args:
            term: Substring, regex pattern, or whitespace separated terms
            root: Directory to walk
            use_regex: Match term as a case-insensitive regex against the raw name
            use_fuzzy: Require every whitespace separated term in the name

        Raises:
            PatternError: If use_regex is set and term is not a valid pattern
            RootNotFoundError: If root does not exist
        """
        if use_fuzzy:
            return self.search_by_name_fuzzy(term, root)

        if use_regex:
            pattern = compile_pattern(term)
            matches = pattern.search
        else:
            needle = term.lower()
            matches = lambda name: needle in name.lower()

        results = [record.to_search_result(MatchKind.NAME)
                   for record in self._walk(root) if matches(record.file_name)]
        return rank_by_name(results, term)

    def search_by_name_fuzzy(self, term: str, root: str) -> List[SearchResult]:
        """Find files whose lowercased name contains every whitespace separated term."""
        terms = [t for t in term.lower().split() if t]
        if not terms:
            return []

        results = []
        for record in self._walk(root):
            name = record.file_name.lower()
            if all(t in name for t in terms):
                results.append(record.to_search_result(MatchKind.NAME))
        return rank_fuzzy(results, terms)

    def search_by_content(self, term: str, root: str, use_regex: bool = False,
                          use_fuzzy: bool = False) -> List[SearchResult]:
        """
        Find text-like files with at least one line matching term.

        The fuzzy flag has no meaning for content and is ignored.

        Raises:
            PatternError: If use_regex is set and term is not a valid pattern
            RootNotFoundError: If root does not exist
        """
        if use_regex:
            pattern = compile_pattern(term)
            line_matches = lambda line: pattern.search(line) is not None
        else:
            needle = term.lower()
            line_matches = lambda line: needle in line.lower()

        candidates = [record for record in self._walk(root)
                      if self.is_text_file(record.file_name)
                      and self.path_filter.is_content_eligible(record.size_bytes)]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            found = list(pool.map(lambda record: self._file_matches(record.absolute_path, line_matches),
                                  candidates))

        results = [record.to_search_result(MatchKind.CONTENT)
                   for record, hit in zip(candidates, found) if hit]
        return rank_by_size(results)

    def is_text_file(self, file_name: str) -> bool:
        """
        Known text extensions, or no extension at all.

        A name containing any dot is not extensionless, so dotfiles such as
        ``.env`` are never scanned.
        """
        if '.' not in file_name:
            return self.config.content.include_extensionless
        return Path(file_name).suffix.lower() in self.text_extensions

    def _file_matches(self, path: str, line_matches: Callable[[str], bool]) -> bool:
        # Stops at the first matching line
        try:
            with open(path, 'r', encoding=self.config.content.encoding) as f:
                for line in f:
                    if line_matches(line.rstrip('\r\n')):
                        return True
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
        return False
