"""
Search tools and utilities for filescout.

This module contains the traversal policy, the name trie, content
extraction, the index builder and the indexed and live search engines.
"""

from .path_filter import PathFilter
from .name_index import NameIndex
from .fs_walker import FSWalker
from .extractors import ContentExtractor
from .indexer import Indexer, IndexSnapshot
from .indexed_search import IndexedSearchEngine
from .live_search import LiveSearchEngine

__all__ = [
    'PathFilter',
    'NameIndex',
    'FSWalker',
    'ContentExtractor',
    'Indexer',
    'IndexSnapshot',
    'IndexedSearchEngine',
    'LiveSearchEngine'
]
