"""
Search results data models for filescout.

This module defines the core data structures for representing indexed files
and search results: the immutable per-file record kept in the catalog, the
transient per-query result, and the result set handed back to callers.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .search_query import SearchQuery


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form."""
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"


class MatchKind(Enum):
    """Which part of a file produced a match."""
    NAME = "name"
    CONTENT = "content"


class FileRecord(BaseModel):
    """
    Catalog entry for a single indexed file.

    Records are immutable and keyed by absolute path; a rebuild replaces
    every record rather than updating it.

    Attributes:
        file_name: Name of the file including its extension
        absolute_path: Absolute path, unique within one index
        size_bytes: File size in bytes
        last_modified_millis: Last modification time in milliseconds since the epoch
    """

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., description="Name of the file")
    absolute_path: str = Field(..., min_length=1, description="Absolute path to the file")
    size_bytes: int = Field(..., ge=0, description="File size in bytes")
    last_modified_millis: int = Field(..., description="Last modification time in milliseconds")

    def get_extension(self) -> Optional[str]:
        """Get the lowercased file extension."""
        suffix = Path(self.file_name).suffix
        return suffix.lower() if suffix else None

    def get_modified_time(self) -> datetime:
        """Get the modification time as a datetime."""
        return datetime.fromtimestamp(self.last_modified_millis / 1000.0)

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        return format_size(self.size_bytes)

    def to_search_result(self, match_kind: 'MatchKind') -> 'SearchResult':
        """Convert this record into a search result of the given kind."""
        return SearchResult(
            file_path=self.absolute_path,
            file_name=self.file_name,
            size=self.size_bytes,
            last_modified=self.last_modified_millis,
            match_kind=match_kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary representation."""
        data = self.model_dump()
        data['size_human'] = self.get_size_human_readable()
        data['modified_time'] = self.get_modified_time().isoformat()
        return data

    def __str__(self) -> str:
        return (f"File: {self.file_name} | Path: {self.absolute_path} | "
                f"Size: {self.size_bytes} bytes | Modified: {self.get_modified_time():%Y-%m-%d %H:%M:%S}")


class SearchResult(BaseModel):
    """
    A single file matched by a query.

    Results are rebuilt for every query and never persisted.

    Attributes:
        file_path: Path to the matched file
        file_name: Name of the matched file, original case
        size: File size in bytes
        last_modified: Last modification time in milliseconds since the epoch
        match_kind: Whether the name or the content matched
        rank: Position in the result set (1-based)
    """

    file_path: str = Field(..., min_length=1, description="Path to the matched file")
    file_name: str = Field(..., description="Name of the matched file")
    size: int = Field(..., ge=0, description="File size in bytes")
    last_modified: int = Field(..., description="Last modification time in milliseconds")
    match_kind: MatchKind = Field(..., description="Which part of the file matched")
    rank: Optional[int] = Field(None, ge=1, description="Rank in the result set")

    @field_validator('match_kind', mode='before')
    @classmethod
    def validate_match_kind(cls, v) -> MatchKind:
        """Ensure match_kind is MatchKind enum."""
        if isinstance(v, str):
            try:
                return MatchKind(v)
            except ValueError:
                raise ValueError(f"Invalid match kind: {v}")
        return v

    def get_directory(self) -> str:
        """Get the directory containing this file."""
        return str(Path(self.file_path).parent)

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        return format_size(self.size)

    def get_modified_time(self) -> datetime:
        """Get the modification time as a datetime."""
        return datetime.fromtimestamp(self.last_modified / 1000.0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert search result to dictionary representation."""
        data = self.model_dump()
        data['match_kind'] = self.match_kind.value
        data['directory'] = self.get_directory()
        data['size_human'] = self.get_size_human_readable()
        data['modified_time'] = self.get_modified_time().isoformat()
        return data

    def __str__(self) -> str:
        """Display line: name, size, kind and modification time."""
        return (f"{self.file_name:<60}  {self.get_size_human_readable():>10}  "
                f"{self.match_kind.value.upper():<8}  {self.get_modified_time():%b %d %H:%M}")


class SearchResults(BaseModel):
    """
    Complete results from a search operation.

    Attributes:
        query: The query that produced these results
        matches: Ranked list of matched files
        total_scanned: Number of files examined (live searches) or indexed files consulted
        execution_time: Time taken to execute the search in seconds
        timestamp: When the search was executed
        errors: Errors reported instead of raised (invalid pattern, missing root, ...)
        warnings: Non-fatal conditions such as querying before the index is built
    """

    query: Optional[SearchQuery] = Field(None, description="The query that produced these results")
    matches: List[SearchResult] = Field(default_factory=list, description="List of matched files")
    total_scanned: int = Field(0, ge=0, description="Total number of files examined")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken to execute the search")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")
    errors: List[str] = Field(default_factory=list, description="Errors encountered during search")
    warnings: List[str] = Field(default_factory=list, description="Non-fatal conditions, e.g. no index yet")

    def model_post_init(self, __context) -> None:
        """Assign ranks to matches after initialization."""
        self._assign_ranks()

    def _assign_ranks(self) -> None:
        """Assign rank numbers to matches based on their order."""
        for i, match in enumerate(self.matches, 1):
            match.rank = i

    def get_match_count(self) -> int:
        """Get the total number of matches."""
        return len(self.matches)

    def get_match(self, number: int) -> SearchResult:
        """
        Get a match by its 1-based display number.

        Raises:
            IndexError: If the number is outside 1..match count
        """
        if number < 1 or number > len(self.matches):
            raise IndexError(number)
        return self.matches[number - 1]

    def remove_match(self, number: int) -> SearchResult:
        """Remove a match by its 1-based number, keeping the order of the others."""
        match = self.get_match(number)
        del self.matches[number - 1]
        self._assign_ranks()
        return match

    def get_matches_by_kind(self, match_kind: MatchKind) -> List[SearchResult]:
        """Get all matches of a specific kind."""
        return [match for match in self.matches if match.match_kind == match_kind]

    def has_errors(self) -> bool:
        """Check if any errors occurred during search."""
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        """Add an error message to the results."""
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        data = self.model_dump()
        data['query'] = self.query.to_dict() if self.query else None
        data['matches'] = [match.to_dict() for match in self.matches]
        data['match_count'] = self.get_match_count()
        data['timestamp'] = self.timestamp.isoformat()
        data['has_errors'] = self.has_errors()
        return data

    def __str__(self) -> str:
        """String representation of search results."""
        parts = [f"Found {self.get_match_count()} matches"]
        parts.append(f"Scanned {self.total_scanned} files")
        parts.append(f"Took {self.execution_time:.2f}s")

        if self.has_errors():
            parts.append(f"Errors: {len(self.errors)}")

        return " | ".join(parts)
