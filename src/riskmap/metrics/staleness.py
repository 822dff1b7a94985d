"""File staleness and knowledge loss relative to a reference day."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from ..history.models import Commit
from .models import Hotspot, KnowledgeLossRow, OwnershipRow, StalenessRow


def resolve_until_day(commits: Iterable[Commit], until: Optional[str] = None) -> str:
    """Reference day: explicit ``until``, else the latest commit day, else ""."""
    if until:
        return until
    return max((c.date_day for c in commits if c.date_day), default="")


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def days_between(start: Optional[str], until: Optional[date]) -> Optional[int]:
    """Whole days from ``start`` to ``until``; None if either is unusable."""
    if until is None:
        return None
    start_day = _parse_day(start)
    if start_day is None:
        return None
    return (until - start_day).days


def _age_sort_key(age: Optional[int], change_count: int, path: str) -> tuple:
    # Unknown ages sort after every known age
    return (-(age if age is not None else -1), -change_count, path)


def compute_staleness(hotspots: Sequence[Hotspot], until_day: str) -> list[StalenessRow]:
    """Days since each file was last touched.

    Sorted by age_days desc (unknown last), change_count desc, path asc.
    """
    until = _parse_day(until_day)
    rows = [
        StalenessRow(
            path=h.path,
            age_days=days_between(h.last_touched_at, until),
            last_touched_at=h.last_touched_at,
            change_count=h.change_count,
            churn_lines=h.churn_lines,
        )
        for h in hotspots
    ]
    rows.sort(key=lambda r: _age_sort_key(r.age_days, r.change_count, r.path))
    return rows


def top_owners(ownership: Iterable[OwnershipRow]) -> dict[str, OwnershipRow]:
    """Primary owner per path.

    Highest churn_pct wins, ties go to more churn_lines, remaining ties to
    the first row seen.
    """
    top: dict[str, OwnershipRow] = {}
    for row in ownership:
        if not row.path:
            continue
        cur = top.get(row.path)
        if (
            cur is None
            or row.churn_pct > cur.churn_pct
            or (row.churn_pct == cur.churn_pct and row.churn_lines > cur.churn_lines)
        ):
            top[row.path] = row
    return top


def compute_knowledge_loss(
    hotspots: Sequence[Hotspot],
    ownership: Iterable[OwnershipRow],
    until_day: str,
) -> list[KnowledgeLossRow]:
    """Days since each file's primary owner last touched it.

    Sorted by loss_days desc (unknown last), change_count desc, path asc.
    """
    until = _parse_day(until_day)
    by_path = {h.path: h for h in hotspots}

    rows = []
    for path, owner in top_owners(ownership).items():
        hs = by_path.get(path)
        rows.append(
            KnowledgeLossRow(
                path=path,
                top_author=owner.author,
                top1_pct=owner.churn_pct,
                last_seen=owner.last_touched_at,
                loss_days=days_between(owner.last_touched_at, until),
                change_count=hs.change_count if hs else 0,
                churn_lines=hs.churn_lines if hs else 0,
            )
        )
    rows.sort(key=lambda r: _age_sort_key(r.loss_days, r.change_count, r.path))
    return rows
