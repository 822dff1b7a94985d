"""Per-(file, author) churn ownership."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from ..history.models import Commit
from .hotspots import iter_touches
from .models import OwnershipRow


def compute_ownership(commits: Iterable[Commit]) -> list[OwnershipRow]:
    """Long-table ownership: one row per (path, author).

    churn_pct is the author's share of the path's total churn; the total is
    floored to 1 so all-zero churn paths report 0.0 instead of dividing by
    zero. For any path with nonzero churn the shares sum to 1.0.

    Sorted by path asc, churn_lines desc, author asc.
    """
    path_totals: dict[str, int] = defaultdict(int)
    churn: dict[tuple[str, str], int] = defaultdict(int)
    last_day: dict[tuple[str, str], str] = {}

    for touch in iter_touches(commits):
        key = (touch.path, touch.author)
        path_totals[touch.path] += touch.churn
        churn[key] += touch.churn
        if key not in last_day or touch.date_day > last_day[key]:
            last_day[key] = touch.date_day

    rows = []
    for (path, author), lines in churn.items():
        total = max(1, path_totals[path])
        rows.append(
            OwnershipRow(
                path=path,
                author=author,
                churn_lines=lines,
                churn_pct=lines / total,
                last_touched_at=last_day[(path, author)],
            )
        )
    rows.sort(key=lambda r: (r.path, -r.churn_lines, r.author))
    return rows


def top1_shares(ownership: Iterable[OwnershipRow]) -> dict[str, float]:
    """Largest churn_pct per path."""
    top: dict[str, float] = {}
    for row in ownership:
        if row.path not in top or row.churn_pct > top[row.path]:
            top[row.path] = row.churn_pct
    return top
