"""Author aliasing and path/commit exclusion applied to the commit stream."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from fnmatch import fnmatchcase

from ..logging_config import get_logger
from .models import UNKNOWN_AUTHOR, Commit

logger = get_logger(__name__)


def apply_aliases(commits: Iterable[Commit], aliases: Mapping[str, str]) -> list[Commit]:
    """Rename commit authors through an alias table.

    Keys may be author names or emails. The first match wins, in this order:
    author (exact), author (lower-cased), email (exact), email (lower-cased).
    Commits without an author are attributed to UNKNOWN.
    """
    aliases_lc = {str(k).lower(): v for k, v in aliases.items()}

    def rename(commit: Commit) -> str:
        author = commit.author if commit.author is not None else UNKNOWN_AUTHOR
        email = commit.email or ""
        if author in aliases:
            return aliases[author]
        if author.lower() in aliases_lc:
            return aliases_lc[author.lower()]
        if email.strip():
            if email in aliases:
                return aliases[email]
            if email.lower() in aliases_lc:
                return aliases_lc[email.lower()]
        return author

    return [c.with_author(rename(c)) for c in commits]


def _matches_glob(path: str, globs: Iterable[str]) -> bool:
    for g in globs:
        if fnmatchcase(path, g):
            return True
        # "**/x" also matches x at the repo root
        if g.startswith("**/") and fnmatchcase(path, g[3:]):
            return True
    return False


def apply_excludes(
    commits: Iterable[Commit],
    paths: Iterable[str] = (),
    globs: Iterable[str] = (),
    commit_prefixes: Iterable[str] = (),
) -> list[Commit]:
    """Drop excluded commits and file changes.

    - commits whose sha starts with any of ``commit_prefixes``
    - file changes whose path contains any of ``paths`` as a substring
    - file changes whose path matches any of ``globs`` (backslashes in
      patterns are treated as "/")

    Commits left without any file change are dropped as well.
    """
    subs = [p for p in paths if p]
    patterns = [g.replace("\\", "/") for g in globs if g and g.strip()]
    prefixes = [p for p in commit_prefixes if p]

    def excluded_path(path: str) -> bool:
        return any(s in path for s in subs) or _matches_glob(path, patterns)

    kept: list[Commit] = []
    dropped_files = 0
    for commit in commits:
        if commit.sha and any(commit.sha.startswith(p) for p in prefixes):
            continue
        files = tuple(f for f in commit.files if not (f.path and excluded_path(f.path)))
        dropped_files += len(commit.files) - len(files)
        if files:
            kept.append(commit.with_files(files))

    logger.debug("Exclusions dropped %d file changes", dropped_files)
    return kept
