"""Analysis-related exceptions: file access, parsing, git history."""

from pathlib import Path
from typing import Optional, Sequence

from .base import RiskmapError


class AnalysisError(RiskmapError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class GitHistoryError(AnalysisError):
    """Raised when the commit history of a repository cannot be read.

    This is fatal for a run: without a commit stream there is nothing to
    aggregate.
    """

    def __init__(self, repo: Path, reason: str, command: Optional[Sequence[str]] = None):
        details = {"repo": str(repo), "reason": reason}
        if command:
            details["command"] = " ".join(command)
        super().__init__(f"Cannot read git history: {repo}", details=details)
        self.repo = repo
        self.reason = reason
