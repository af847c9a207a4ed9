"""
Exception hierarchy for filescout.

Failures are isolated to the smallest affected unit: a single file or a
single subtree is skipped and logged, while only a missing root aborts a
build. The exceptions below are the ones that cross module boundaries.
"""


class FileScoutError(Exception):
    """Base class for all filescout errors."""
    pass


class RootNotFoundError(FileScoutError):
    """Raised when a build or live search root does not exist."""

    def __init__(self, root: str):
        self.root = root
        super().__init__(f"Root directory does not exist: {root}")


class PatternError(FileScoutError):
    """Raised when a regular expression query cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern '{pattern}': {reason}")


class ExtractionError(FileScoutError):
    """Raised when text cannot be extracted from a file."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not extract content of {path}: {reason}")


class InvalidArgumentError(FileScoutError):
    """Raised for out-of-range result numbers and other caller mistakes."""
    pass
