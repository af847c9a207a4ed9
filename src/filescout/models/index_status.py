"""
Index status data models for filescout.

Statistics describe the index currently in memory; a build report describes
the outcome of one build call, successful or not.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, Field

from .search_results import format_size


STATUS_NOT_BUILT = "Index not built yet"
STATUS_READY = "Index ready"


class IndexStatistics(BaseModel):
    """
    Summary of the in-memory index.

    Attributes:
        total_files: Number of files in the catalog
        text_files: Number of files whose content was stored
        total_size_bytes: Sum of the sizes of all cataloged files
        root_directory: Root the index was built from, if any
        status: Human-readable index status
        built_at: When the current index was built
    """

    total_files: int = Field(0, ge=0, description="Number of indexed files")
    text_files: int = Field(0, ge=0, description="Number of content-indexed files")
    total_size_bytes: int = Field(0, ge=0, description="Total size of indexed files")
    root_directory: Optional[str] = Field(None, description="Root directory of the index")
    status: str = Field(STATUS_NOT_BUILT, description="Index status")
    built_at: Optional[datetime] = Field(None, description="When the index was built")

    def is_ready(self) -> bool:
        return self.status == STATUS_READY

    def get_size_human_readable(self) -> str:
        return format_size(self.total_size_bytes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary representation."""
        data = self.model_dump()
        data['total_size_human'] = self.get_size_human_readable()
        data['built_at'] = self.built_at.isoformat() if self.built_at else None
        return data

    def __str__(self) -> str:
        parts = [self.status]
        if self.root_directory:
            parts.append(f"Root: {self.root_directory}")
        parts.append(f"Files: {self.total_files}")
        parts.append(f"Text files: {self.text_files}")
        parts.append(f"Size: {self.get_size_human_readable()}")
        return " | ".join(parts)


class IndexBuildReport(BaseModel):
    """
    Outcome of a single build call.

    Attributes:
        root_directory: Root that was requested
        success: Whether a new index was installed
        files_indexed: Files recorded in the catalog and name index
        content_indexed: Files whose extracted text was stored
        directories_skipped: Directories pruned by the filter or skipped after an error
        errors: Per-file and per-subtree problems, or the reason the build was aborted
        duration_seconds: Wall-clock duration of the build
    """

    root_directory: str = Field(..., description="Requested root directory")
    success: bool = Field(False, description="Whether the index was rebuilt")
    files_indexed: int = Field(0, ge=0, description="Number of files indexed")
    content_indexed: int = Field(0, ge=0, description="Number of files with stored content")
    directories_skipped: int = Field(0, ge=0, description="Number of directories skipped")
    errors: List[str] = Field(default_factory=list, description="Problems encountered during the build")
    duration_seconds: float = Field(0.0, ge=0.0, description="Build duration in seconds")

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def __str__(self) -> str:
        if not self.success:
            reason = self.errors[0] if self.errors else "unknown error"
            return f"Index build failed for {self.root_directory}: {reason}"
        return (f"Indexed {self.files_indexed} files ({self.content_indexed} with content) "
                f"under {self.root_directory} in {self.duration_seconds:.2f}s")
