"""
Configuration data models for filescout.

This module defines the core data structures for managing application
configuration: which directories are pruned during traversal, which file
extensions carry searchable content, and the size ceilings and worker limits
applied by the indexed and live search engines.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator


MEGABYTE = 1024 * 1024

DEFAULT_INDEX_SKIP_DIRECTORIES = [
    ".git", "node_modules", "target", "build", ".idea", ".vscode",
    "library", "system", "cache", "logs",
]

DEFAULT_LIVE_SKIP_DIRECTORIES = [
    ".git", ".svn", ".hg", "node_modules", "target", "build", "bin", "obj",
    "Library", "System", "Applications", "private", "var", "tmp", "usr",
]

DEFAULT_INDEX_TEXT_EXTENSIONS = [
    ".txt", ".java", ".py", ".js", ".html", ".css", ".md", ".json", ".xml", ".csv",
]

DEFAULT_LIVE_TEXT_EXTENSIONS = [
    ".txt", ".md", ".java", ".py", ".js", ".html", ".css", ".xml", ".json", ".csv",
    ".log", ".properties", ".yml", ".yaml",
]


def _normalize_extensions(values: List[str]) -> List[str]:
    normalized = []
    for ext in values:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith('.'):
            ext = '.' + ext
        if ext not in normalized:
            normalized.append(ext)
    return normalized


class FilterConfig(BaseModel):
    """
    Directory pruning configuration.

    Attributes:
        index_skip_directories: Directory names never descended into while indexing
        live_skip_directories: Directory names never descended into by live searches
        skip_hidden: Whether directories starting with '.' are pruned
        index_case_sensitive: Whether index skip names are compared case-sensitively
        live_case_sensitive: Whether live skip names are compared case-sensitively
    """

    index_skip_directories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INDEX_SKIP_DIRECTORIES),
        description="Directories pruned while building the index"
    )
    live_skip_directories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LIVE_SKIP_DIRECTORIES),
        description="Directories pruned by live searches"
    )
    skip_hidden: bool = Field(True, description="Prune directories whose name starts with '.'")
    index_case_sensitive: bool = Field(False, description="Case-sensitive skip matching while indexing")
    live_case_sensitive: bool = Field(True, description="Case-sensitive skip matching for live searches")

    @field_validator('index_skip_directories', 'live_skip_directories')
    @classmethod
    def validate_skip_directories(cls, v: List[str]) -> List[str]:
        """Strip names and drop blanks."""
        names = []
        for name in v:
            if name and name.strip():
                names.append(name.strip())
        return names

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class LimitsConfig(BaseModel):
    """
    Configuration for size ceilings and concurrency.

    The two content ceilings are independent: the index tolerates larger
    files than a live scan, which re-reads them on every query.

    Attributes:
        index_content_max_bytes: Largest file whose content is extracted into the index
        live_content_max_bytes: Largest file scanned line by line by live content searches
        max_concurrent: Worker threads for live content scanning (None: one per processor)
        progress_interval: Number of files between build progress log messages
    """

    index_content_max_bytes: int = Field(50 * MEGABYTE, gt=0, description="Index content ceiling (bytes)")
    live_content_max_bytes: int = Field(10 * MEGABYTE, gt=0, description="Live content ceiling (bytes)")
    max_concurrent: Optional[int] = Field(None, gt=0, description="Live content scanning workers")
    progress_interval: int = Field(100, gt=0, description="Files between progress messages")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class ContentConfig(BaseModel):
    """
    Configuration of which files carry searchable content.

    Attributes:
        index_text_extensions: Extensions read as plain text while indexing
        pdf_extensions: Extensions handled by the PDF extractor
        spreadsheet_extensions: Extensions handled by the OOXML spreadsheet extractor
        legacy_spreadsheet_extensions: Extensions handled by the legacy (BIFF) spreadsheet extractor
        live_text_extensions: Extensions considered text-like by live content searches
        include_extensionless: Whether live content searches scan files without an extension
        encoding: Encoding used to decode text files
    """

    index_text_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INDEX_TEXT_EXTENSIONS),
        description="Plain text extensions indexed for content"
    )
    pdf_extensions: List[str] = Field(default_factory=lambda: [".pdf"], description="PDF extensions")
    spreadsheet_extensions: List[str] = Field(
        default_factory=lambda: [".xlsx", ".xlsm"],
        description="Spreadsheet extensions"
    )
    legacy_spreadsheet_extensions: List[str] = Field(
        default_factory=lambda: [".xls"],
        description="Legacy Excel extensions"
    )
    live_text_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LIVE_TEXT_EXTENSIONS),
        description="Extensions scanned by live content searches"
    )
    include_extensionless: bool = Field(True, description="Scan files without an extension in live searches")
    encoding: str = Field("utf-8", description="Text file encoding")

    @field_validator('index_text_extensions', 'pdf_extensions', 'spreadsheet_extensions',
                     'legacy_spreadsheet_extensions', 'live_text_extensions', mode='before')
    @classmethod
    def validate_extensions(cls, v) -> List[str]:
        """Normalize extensions to lowercase with a leading dot."""
        if isinstance(v, str):
            v = [v]
        return _normalize_extensions(v)

    def get_content_extensions(self) -> List[str]:
        """All extensions whose content is extracted while indexing."""
        return (self.index_text_extensions + self.pdf_extensions
                + self.spreadsheet_extensions + self.legacy_spreadsheet_extensions)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class SearchConfig(BaseModel):
    """
    Main configuration class for filescout.

    Attributes:
        default_root: Directory searched when the caller does not name one
        filters: Directory pruning configuration
        limits: Size ceilings and concurrency
        content: Content-bearing extensions
    """

    default_root: Optional[str] = Field(None, description="Default root directory")
    filters: FilterConfig = Field(default_factory=FilterConfig, description="Directory pruning configuration")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Size ceilings and concurrency")
    content: ContentConfig = Field(default_factory=ContentConfig, description="Content-bearing extensions")

    @field_validator('default_root')
    @classmethod
    def validate_default_root(cls, v: Optional[str]) -> Optional[str]:
        """Expand and resolve the default root."""
        if v is None or not v.strip():
            return None
        return str(Path(v).expanduser().resolve())

    def get_default_root(self) -> str:
        """Get the default root, falling back to the user's home directory."""
        return self.default_root or str(Path.home())

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for settings that are legal but suspicious.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.default_root and not Path(self.default_root).is_dir():
            warnings.append(f"Default root is not an existing directory: {self.default_root}")

        if self.limits.index_content_max_bytes > 500 * MEGABYTE:
            warnings.append("Very high index_content_max_bytes may exhaust memory; extracted content is kept in memory")

        if self.limits.live_content_max_bytes > self.limits.index_content_max_bytes:
            warnings.append("live_content_max_bytes exceeds index_content_max_bytes")

        overlap = (set(self.content.index_text_extensions)
                   & (set(self.content.pdf_extensions) | set(self.content.spreadsheet_extensions)
                      | set(self.content.legacy_spreadsheet_extensions)))
        if overlap:
            warnings.append(f"Extensions configured for more than one extractor: {', '.join(sorted(overlap))}")

        if not self.content.get_content_extensions():
            warnings.append("No content extensions configured - content search will never match")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'default_root': self.default_root,
            'filters': self.filters.to_dict(),
            'limits': self.limits.to_dict(),
            'content': self.content.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Default root: {self.get_default_root()}"]
        parts.append(f"Index skips: {len(self.filters.index_skip_directories)}")
        parts.append(f"Live skips: {len(self.filters.live_skip_directories)}")
        parts.append(f"Content extensions: {len(self.content.get_content_extensions())}")
        return " | ".join(parts)
