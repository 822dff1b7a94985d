"""Commit history: git extraction, models, and pre-processing filters."""

from .filters import apply_aliases, apply_excludes
from .git_extractor import GitExtractor, parse_log
from .models import UNKNOWN_AUTHOR, Commit, FileChange, day_of

__all__ = [
    "Commit",
    "FileChange",
    "GitExtractor",
    "UNKNOWN_AUTHOR",
    "apply_aliases",
    "apply_excludes",
    "day_of",
    "parse_log",
]
