"""Exceptions raised while analyzing component source files.

Every error here is recoverable at the registry level: the offending file is
skipped and recorded as a diagnostic, the rest of the run continues.
"""
from pathlib import Path


class AnalysisError(Exception):
    """Base class for per-file analysis failures."""

    kind = "analysis"

    def __init__(self, file_path: str | Path, message: str):
        self.file_path = str(file_path)
        self.message = message
        super().__init__(f"{self.file_path}: {message}")


class SourceReadError(AnalysisError):
    """File is missing, unreadable or not valid UTF-8."""

    kind = "read"


class SourceParseError(AnalysisError):
    """Source text contains syntax errors."""

    kind = "parse"


class UnsupportedFileError(AnalysisError):
    """No grammar is registered for the file extension."""

    kind = "unsupported"
