"""
Search query data models for filescout.

This module defines the structures describing one search request: the term,
which part of a file it is matched against, and whether the filesystem is
walked live or the in-memory index is consulted.
"""

from typing import Dict, List, Any
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


class SearchMode(Enum):
    """What a search term is matched against."""
    NAME = "name"
    PREFIX = "prefix"
    CONTENT = "content"
    NAME_AND_CONTENT = "name_and_content"


class SearchQuery(BaseModel):
    """
    Represents a search request with all of its matching options.

    Attributes:
        term: The search term (substring, regex pattern or whitespace separated terms)
        mode: What the term is matched against
        use_regex: Treat the term as a case-insensitive regular expression (live only)
        use_fuzzy: Require every whitespace separated term to occur in the name (live only)
        live: Walk the filesystem instead of querying the built index
    """

    term: str = Field(..., min_length=1, description="Search term")
    mode: SearchMode = Field(SearchMode.NAME_AND_CONTENT, description="What the term is matched against")
    use_regex: bool = Field(False, description="Interpret the term as a regular expression")
    use_fuzzy: bool = Field(False, description="Match all whitespace separated terms")
    live: bool = Field(False, description="Walk the filesystem at query time")

    @field_validator('term')
    @classmethod
    def validate_term(cls, v: str) -> str:
        """Reject blank terms; the term is otherwise kept verbatim."""
        if not v or not v.strip():
            raise ValueError("Search term cannot be empty")
        return v

    @field_validator('mode', mode='before')
    @classmethod
    def validate_mode(cls, v) -> SearchMode:
        """Validate and convert mode to enum."""
        if isinstance(v, str):
            try:
                return SearchMode(v)
            except ValueError:
                raise ValueError(f"Invalid search mode: {v}")
        return v

    @model_validator(mode='after')
    def validate_options(self):
        """Reject option combinations that have no meaning."""
        if self.use_regex and self.use_fuzzy:
            raise ValueError("Regex and fuzzy matching cannot be combined")
        if not self.live and (self.use_regex or self.use_fuzzy):
            raise ValueError("Regex and fuzzy matching require a live search")
        if self.live and self.mode in (SearchMode.PREFIX, SearchMode.NAME_AND_CONTENT):
            raise ValueError(f"Search mode '{self.mode.value}' requires the index")
        return self

    def get_terms(self) -> List[str]:
        """Get the lowercased whitespace separated terms used by fuzzy matching."""
        return [term for term in self.term.lower().split() if term]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search query to a dictionary representation."""
        data = self.model_dump()
        data['mode'] = self.mode.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchQuery':
        """Create a SearchQuery instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search query."""
        parts = [f"Query: '{self.term}'"]
        parts.append(f"Mode: {self.mode.value}")

        if self.use_regex:
            parts.append("Regex")
        if self.use_fuzzy:
            parts.append("Fuzzy")

        parts.append("Live" if self.live else "Indexed")

        return " | ".join(parts)
