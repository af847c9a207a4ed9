"""
Data models for filescout.

This module contains all the core data structures used throughout the system.
"""

from .search_query import SearchQuery, SearchMode
from .search_results import FileRecord, SearchResult, SearchResults, MatchKind
from .index_status import IndexStatistics, IndexBuildReport

__all__ = [
    'SearchQuery',
    'SearchMode',
    'FileRecord',
    'SearchResult',
    'SearchResults',
    'MatchKind',
    'IndexStatistics',
    'IndexBuildReport'
]
