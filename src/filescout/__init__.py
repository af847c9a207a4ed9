"""
filescout - Core Package

An in-memory filesystem index with name, prefix and content search, plus a
live mode that walks the filesystem at query time.
"""

from .service import FileSearchService
from .models import SearchMode

__version__ = "0.1.0"
__author__ = "filescout Team"

__all__ = ['FileSearchService', 'SearchMode']
