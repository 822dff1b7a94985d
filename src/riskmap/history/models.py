"""Data models for the commit stream."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

UNKNOWN_AUTHOR = "UNKNOWN"


@dataclass(frozen=True)
class FileChange:
    path: str  # repo-relative, "/"-separated
    added: int
    deleted: int

    @property
    def churn(self) -> int:
        return self.added + self.deleted


@dataclass(frozen=True)
class Commit:
    sha: str
    author: Optional[str]
    email: Optional[str]
    date: str  # ISO-8601 with offset, as printed by git --date=iso-strict
    date_day: str  # YYYY-MM-DD, used for all day-bucketed aggregation
    files: tuple[FileChange, ...] = field(default_factory=tuple)

    @property
    def author_or_unknown(self) -> str:
        if self.author is None or not self.author.strip():
            return UNKNOWN_AUTHOR
        return self.author

    def with_author(self, author: str) -> Commit:
        return replace(self, author=author)

    def with_files(self, files: tuple[FileChange, ...]) -> Commit:
        return replace(self, files=tuple(files))

    def to_raw(self) -> dict[str, Any]:
        """Compact row used by the report's raw commit table."""
        return {
            "sha": self.sha,
            "author": self.author_or_unknown,
            "date_day": self.date_day,
            "files": [
                {"path": f.path, "added": f.added, "deleted": f.deleted} for f in self.files
            ],
        }


def day_of(date: str) -> str:
    """Calendar day of an ISO-8601 timestamp, in the timestamp's own offset.

    Raises ValueError for unparseable input.
    """
    text = date.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date().isoformat()
