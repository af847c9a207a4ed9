"""
Caller-facing search service for filescout.

FileSearchService is what a CLI or GUI talks to. It owns one indexed engine
and one live engine, converts expected failures into the error lists of the
returned reports instead of raising, and keeps the most recent result list so
callers can open or delete a result by its displayed number.
"""

import os
import time
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from .errors import InvalidArgumentError, PatternError, RootNotFoundError
from .models.config import SearchConfig
from .models.index_status import IndexBuildReport, IndexStatistics
from .models.search_query import SearchMode, SearchQuery
from .models.search_results import MatchKind, SearchResult, SearchResults
from .tools.fs_walker import resolve_root
from .tools.indexed_search import IndexedSearchEngine
from .tools.live_search import LiveSearchEngine
from .tools.ranking import name_tier


logger = logging.getLogger(__name__)

INDEX_NOT_BUILT_WARNING = "Index not built yet. Build the index before searching."


def _validation_message(error: ValidationError) -> str:
    return "; ".join(str(detail['msg']) for detail in error.errors())


class FileSearchService:
    """
    Build, search, statistics and follow-up operations on search results.

    Attributes:
        config: Search configuration shared by both engines
        indexed: Engine answering queries against the built index
        live: Engine walking the filesystem per query
        search_path: Root walked by live searches
    """

    def __init__(self, config: Optional[SearchConfig] = None,
                 indexed: Optional[IndexedSearchEngine] = None,
                 live: Optional[LiveSearchEngine] = None):
        self.config = config or SearchConfig()
        self.indexed = indexed or IndexedSearchEngine(self.config)
        self.live = live or LiveSearchEngine(self.config)
        self.search_path = self.config.get_default_root()
        self._last_results: Optional[SearchResults] = None

    def build(self, root: Optional[str] = None) -> IndexBuildReport:
        """
        Build the index for root (default: the current search path).

        A missing root aborts this build only: the error is reported and the
        previously built index, if any, stays in use.
        """
        root = root or self.search_path
        try:
            snapshot = self.indexed.build_index(root)
        except RootNotFoundError as e:
            logger.error(f"Index build aborted: {e}")
            return IndexBuildReport(root_directory=str(root), success=False, errors=[str(e)])

        self.search_path = snapshot.root_directory
        return IndexBuildReport(
            root_directory=snapshot.root_directory,
            success=True,
            files_indexed=len(snapshot.catalog),
            content_indexed=len(snapshot.content_store),
            directories_skipped=snapshot.directories_skipped,
            errors=list(snapshot.errors),
            duration_seconds=snapshot.duration_seconds
        )

    def refresh(self) -> IndexBuildReport:
        """Rebuild the index from the root it was last built from."""
        return self.build(self.indexed.root_directory or self.search_path)

    def change_search_path(self, path: str) -> str:
        """
        Change the directory walked by live searches.

        Raises:
            RootNotFoundError: If path is not an existing directory
        """
        self.search_path = str(resolve_root(path))
        logger.info(f"Search path changed to: {self.search_path}")
        return self.search_path

    def search(self, term: str, mode: SearchMode = SearchMode.NAME_AND_CONTENT,
               use_regex: bool = False, use_fuzzy: bool = False,
               live: bool = False) -> SearchResults:
        """
        Run a search and remember its results.

        Invalid options, malformed patterns and missing roots produce an empty
        result set with the problem in ``errors``; the previously retained
        results are left untouched in that case.
        """
        start = time.time()
        try:
            query = SearchQuery(term=term, mode=mode, use_regex=use_regex,
                                use_fuzzy=use_fuzzy, live=live)
        except ValidationError as e:
            message = f"Invalid search: {_validation_message(e)}"
            logger.warning(message)
            return SearchResults(errors=[message])

        try:
            if query.live:
                results = self._search_live(query)
            else:
                results = self._search_indexed(query)
        except (PatternError, RootNotFoundError) as e:
            logger.warning(str(e))
            return SearchResults(query=query, errors=[str(e)], execution_time=time.time() - start)

        results.execution_time = time.time() - start
        self._last_results = results
        return results

    def _search_indexed(self, query: SearchQuery) -> SearchResults:
        if not self.indexed.is_indexed():
            logger.warning(INDEX_NOT_BUILT_WARNING)
            return SearchResults(query=query, warnings=[INDEX_NOT_BUILT_WARNING])

        term = query.term
        if query.mode == SearchMode.NAME:
            matches = [r.to_search_result(MatchKind.NAME) for r in self.indexed.search_by_name(term)]
        elif query.mode == SearchMode.PREFIX:
            matches = [r.to_search_result(MatchKind.NAME) for r in self.indexed.search_by_name_prefix(term)]
        elif query.mode == SearchMode.CONTENT:
            matches = [r.to_search_result(MatchKind.CONTENT) for r in self.indexed.search_by_content(term)]
        else:
            matches = []
            for record in self.indexed.search_by_name_and_content(term):
                kind = MatchKind.NAME if name_tier(record.file_name, term) < 2 else MatchKind.CONTENT
                matches.append(record.to_search_result(kind))

        return SearchResults(query=query, matches=matches,
                             total_scanned=self.indexed.get_statistics().total_files)

    def _search_live(self, query: SearchQuery) -> SearchResults:
        if query.mode == SearchMode.CONTENT:
            matches = self.live.search_by_content(query.term, self.search_path, use_regex=query.use_regex)
        else:
            matches = self.live.search_by_name(query.term, self.search_path,
                                               use_regex=query.use_regex, use_fuzzy=query.use_fuzzy)
        return SearchResults(query=query, matches=matches, total_scanned=self.live.get_last_scanned())

    def get_statistics(self) -> IndexStatistics:
        """Summarize the current index; before a build the search path is reported as root."""
        stats = self.indexed.get_statistics()
        if stats.root_directory is None:
            stats.root_directory = self.search_path
        return stats

    @property
    def last_results(self) -> List[SearchResult]:
        """The result list of the most recent successful search."""
        return list(self._last_results.matches) if self._last_results else []

    def get_result(self, number: int) -> SearchResult:
        """
        Get a result of the most recent search by its 1-based number.

        Raises:
            InvalidArgumentError: If there are no results or number is out of range
        """
        if self._last_results is None or not self._last_results.matches:
            raise InvalidArgumentError("No search results available")
        try:
            return self._last_results.get_match(number)
        except IndexError:
            raise InvalidArgumentError(
                f"Invalid result number {number}; available: 1-{self._last_results.get_match_count()}")

    def open_result(self, number: int, opener: Callable[[str], None]) -> str:
        """
        Hand the path of result ``number`` to an opener (OS integration).

        Returns:
            The path that was opened
        """
        result = self.get_result(number)
        opener(result.file_path)
        return result.file_path

    def delete_result(self, number: int, confirm: Callable[[SearchResult], bool]) -> bool:
        """
        Delete the file behind result ``number`` of the most recent live search.

        ``confirm`` is called with the result and must return True for the
        deletion to go ahead. On success the entry is removed from the
        retained results and the remaining entries keep their order.

        Returns:
            True if the file was deleted, False if cancelled or the deletion failed

        Raises:
            InvalidArgumentError: If the last search was not live or number is out of range
        """
        if self._last_results is None or self._last_results.query is None or not self._last_results.query.live:
            raise InvalidArgumentError("Deletion is only available for live search results")

        result = self.get_result(number)
        if not confirm(result):
            logger.info(f"Deletion of {result.file_path} cancelled")
            return False

        try:
            os.remove(result.file_path)
        except OSError as e:
            logger.error(f"Failed to delete {result.file_path}: {e}")
            return False

        self._last_results.remove_match(number)
        logger.info(f"Deleted {result.file_path}")
        return True
