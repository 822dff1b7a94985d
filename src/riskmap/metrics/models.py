"""Analytic tables produced by the metrics pipeline.

Every row is an immutable value computed once per run. Field names are the
column names used in exported reports.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class _Row:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Hotspot(_Row):
    path: str
    change_count: int  # commits touching the path
    churn_lines: int  # added + deleted over all touches
    last_touched_at: str  # YYYY-MM-DD


@dataclass(frozen=True)
class DirectoryHotspot(_Row):
    dir: str
    file_count: int
    change_count: int
    churn_lines: int


@dataclass(frozen=True)
class DailyActivity(_Row):
    date: str
    commits: int
    authors: int
    files_changed: int
    lines_added: int
    lines_deleted: int


@dataclass(frozen=True)
class OwnershipRow(_Row):
    path: str
    author: str
    churn_lines: int
    churn_pct: float  # share of the path's total churn
    last_touched_at: str


@dataclass(frozen=True)
class CouplingPair(_Row):
    """Co-change statistics for an unordered file pair, stored with a < b."""

    a: str
    b: str
    co_change_count: int
    support_pct: float  # co_change_count / min(touches(a), touches(b))


@dataclass(frozen=True)
class CouplingLink(_Row):
    """One direction of a ranked pair, for per-file lookups."""

    path: str
    other: str
    co_change_count: int
    support_pct: float


@dataclass(frozen=True)
class CouplingCell(_Row):
    a: str
    b: str
    co_change_count: int


@dataclass(frozen=True)
class CouplingResult:
    pairs: list[CouplingPair]
    pairs_long: list[CouplingLink]
    matrix: list[CouplingCell]


@dataclass(frozen=True)
class ComplexityRecord(_Row):
    path: str
    function_name: str
    complexity: int  # 1 + decision points
    language: str = "clojure"


@dataclass(frozen=True)
class RiskRow(_Row):
    path: str
    churn_score: float
    cc_score: float
    ownership_score: float
    risk_score: float
    change_count: int
    churn_lines: int
    cc_sum: int
    top1_pct: float


@dataclass(frozen=True)
class StalenessRow(_Row):
    path: str
    age_days: Optional[int]
    last_touched_at: str
    change_count: int
    churn_lines: int


@dataclass(frozen=True)
class KnowledgeLossRow(_Row):
    path: str
    top_author: str
    top1_pct: float
    last_seen: str
    loss_days: Optional[int]
    change_count: int
    churn_lines: int
