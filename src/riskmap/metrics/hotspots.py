"""Per-file and per-directory change hotspots, plus daily activity."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from ..history.models import Commit
from .models import DailyActivity, DirectoryHotspot, Hotspot

ROOT_DIR = "."


class Touch(NamedTuple):
    """One file change within one commit."""

    path: str
    author: str
    date_day: str
    churn: int


def iter_touches(commits: Iterable[Commit]) -> Iterator[Touch]:
    for commit in commits:
        author = commit.author_or_unknown
        for change in commit.files:
            yield Touch(change.path, author, commit.date_day, change.churn)


def hotspot_sort_key(h: Hotspot) -> tuple:
    # Hottest first; every "top-K" selection downstream relies on this order
    return (-h.change_count, -h.churn_lines, h.path)


def compute_hotspots(commits: Iterable[Commit]) -> list[Hotspot]:
    """Per-file touch counts and churn.

    change_count is the number of (commit, file change) touches, churn_lines
    the summed added + deleted lines, last_touched_at the latest date_day
    (ISO dates compare correctly as strings).

    Sorted by change_count desc, churn_lines desc, path asc.
    """
    counts: dict[str, int] = defaultdict(int)
    churn: dict[str, int] = defaultdict(int)
    last_day: dict[str, str] = {}

    for touch in iter_touches(commits):
        counts[touch.path] += 1
        churn[touch.path] += touch.churn
        if touch.path not in last_day or touch.date_day > last_day[touch.path]:
            last_day[touch.path] = touch.date_day

    rows = [
        Hotspot(
            path=path,
            change_count=count,
            churn_lines=churn[path],
            last_touched_at=last_day[path],
        )
        for path, count in counts.items()
    ]
    rows.sort(key=hotspot_sort_key)
    return rows


def directory_of(path: str, depth: int = 2) -> str:
    """First ``depth`` directory segments of a path, or "." at the root."""
    parts = [p for p in (path or "").split("/") if p]
    kept = parts[:-1][: max(1, depth)]
    return "/".join(kept) if kept else ROOT_DIR


def hotspots_by_dir(hotspots: Iterable[Hotspot], depth: int = 2) -> list[DirectoryHotspot]:
    """Roll file hotspots up to directory prefixes.

    ``depth`` is the number of leading directory segments kept (1 = top-level
    directory); files with fewer segments keep what they have.

    Sorted by change_count desc, churn_lines desc, dir asc.
    """
    depth = max(1, int(depth))
    files: dict[str, int] = defaultdict(int)
    changes: dict[str, int] = defaultdict(int)
    churn: dict[str, int] = defaultdict(int)

    for h in hotspots:
        key = directory_of(h.path, depth)
        files[key] += 1
        changes[key] += h.change_count
        churn[key] += h.churn_lines

    rows = [
        DirectoryHotspot(
            dir=key,
            file_count=files[key],
            change_count=changes[key],
            churn_lines=churn[key],
        )
        for key in files
    ]
    rows.sort(key=lambda r: (-r.change_count, -r.churn_lines, r.dir))
    return rows


def timeseries_by_day(commits: Iterable[Commit]) -> list[DailyActivity]:
    """Daily buckets of commit activity, sorted by date."""
    by_day: dict[str, list[Commit]] = defaultdict(list)
    for commit in commits:
        by_day[commit.date_day].append(commit)

    rows = []
    for day, day_commits in by_day.items():
        changes = [f for c in day_commits for f in c.files]
        rows.append(
            DailyActivity(
                date=day,
                commits=len(day_commits),
                authors=len({c.author for c in day_commits if c.author is not None}),
                files_changed=len({f.path for f in changes}),
                lines_added=sum(f.added for f in changes),
                lines_deleted=sum(f.deleted for f in changes),
            )
        )
    rows.sort(key=lambda r: r.date)
    return rows
