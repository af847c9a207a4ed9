"""
Result ordering shared by the indexed and live search engines.

Name matches are ranked in tiers (exact name, then prefix, then anything
else), fuzzy matches by how many terms hit the name exactly or as a prefix,
and content matches by file size, smallest first.
"""

from typing import List, Sequence, TypeVar, Union

from ..models.search_results import FileRecord, SearchResult


Rankable = TypeVar('Rankable', FileRecord, SearchResult)


def _path_of(item: Union[FileRecord, SearchResult]) -> str:
    if isinstance(item, FileRecord):
        return item.absolute_path
    return item.file_path


def _size_of(item: Union[FileRecord, SearchResult]) -> int:
    if isinstance(item, FileRecord):
        return item.size_bytes
    return item.size


def name_tier(file_name: str, term: str) -> int:
    """0 for an exact name match, 1 for a prefix match, 2 otherwise."""
    name = file_name.lower()
    term = term.lower()
    if name == term:
        return 0
    if name.startswith(term):
        return 1
    return 2


def rank_by_name(items: Sequence[Rankable], term: str) -> List[Rankable]:
    """Order by name tier, then lowercased name, then path."""
    return sorted(items, key=lambda item: (name_tier(item.file_name, term),
                                           item.file_name.lower(), _path_of(item)))


def rank_fuzzy(items: Sequence[Rankable], terms: Sequence[str]) -> List[Rankable]:
    """Order by exact-term count, then prefix-term count (both descending), then name."""
    lowered = [term.lower() for term in terms]

    def key(item):
        name = item.file_name.lower()
        exact = sum(1 for term in lowered if name == term)
        prefix = sum(1 for term in lowered if name.startswith(term))
        return (-exact, -prefix, name, _path_of(item))

    return sorted(items, key=key)


def rank_by_size(items: Sequence[Rankable]) -> List[Rankable]:
    """Order smallest file first; ties by lowercased name, then path."""
    return sorted(items, key=lambda item: (_size_of(item), item.file_name.lower(), _path_of(item)))


def merge_unique(*groups: Sequence[Rankable]) -> List[Rankable]:
    """Concatenate result groups, keeping the first occurrence of each path."""
    seen = set()
    merged = []
    for group in groups:
        for item in group:
            path = _path_of(item)
            if path not in seen:
                seen.add(path)
                merged.append(item)
    return merged
