"""Composite per-file risk score.

risk = w_churn * churn_n + w_cc * cc_n + w_ownership * owner_n

where each signal is min-max normalized across the files of the run:
    churn_raw = 2.0 * change_count + 0.001 * churn_lines
    cc_raw    = summed complexity of the file's functions (0 if none)
    owner_raw = 1 - top1_pct (ownership dispersion; 0 with no ownership rows)
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import Optional

import numpy as np

from ..config import RiskWeights
from .models import ComplexityRecord, Hotspot, OwnershipRow, RiskRow
from .normalization import min_max_normalize
from .ownership import top1_shares

# Change frequency dominates; line volume only breaks ties between
# similarly-touched files.
CHANGE_COUNT_WEIGHT = 2.0
CHURN_LINES_WEIGHT = 0.001


def complexity_sums(records: Iterable[ComplexityRecord]) -> dict[str, int]:
    sums: dict[str, int] = defaultdict(int)
    for r in records:
        sums[r.path] += r.complexity
    return dict(sums)


def compute_risk(
    hotspots: Sequence[Hotspot],
    complexity: Iterable[ComplexityRecord],
    ownership: Iterable[OwnershipRow],
    weights: Optional[RiskWeights] = None,
) -> list[RiskRow]:
    """Score every hotspot path; sorted by risk_score descending.

    Ties keep hotspot order.
    """
    weights = weights or RiskWeights()
    if not hotspots:
        return []

    cc_map = complexity_sums(complexity)
    top1_map = top1_shares(ownership)

    change_counts = np.array([h.change_count for h in hotspots], dtype=np.float64)
    churn_lines = np.array([h.churn_lines for h in hotspots], dtype=np.float64)
    churn_raw = CHANGE_COUNT_WEIGHT * change_counts + CHURN_LINES_WEIGHT * churn_lines
    cc_raw = [float(cc_map.get(h.path, 0)) for h in hotspots]
    top1 = [top1_map.get(h.path, 1.0) for h in hotspots]
    owner_raw = [1.0 - t for t in top1]

    churn_n = min_max_normalize(churn_raw.tolist())
    cc_n = min_max_normalize(cc_raw)
    owner_n = min_max_normalize(owner_raw)

    rows = [
        RiskRow(
            path=h.path,
            churn_score=cs,
            cc_score=ccs,
            ownership_score=os_,
            risk_score=weights.w_churn * cs + weights.w_cc * ccs + weights.w_ownership * os_,
            change_count=h.change_count,
            churn_lines=h.churn_lines,
            cc_sum=cc_map.get(h.path, 0),
            top1_pct=t1,
        )
        for h, cs, ccs, os_, t1 in zip(hotspots, churn_n, cc_n, owner_n, top1)
    ]
    rows.sort(key=lambda r: r.risk_score, reverse=True)
    return rows
