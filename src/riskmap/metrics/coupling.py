"""Temporal coupling: files that change in the same commits.

Only the ``top_k`` hottest files take part. Within that universe every
commit contributes one count to each unordered pair of files it touches;
pairs are stored once, canonicalized to ``(min, max)``.

Three views are produced:
    - pairs: ranked, filtered by ``min_cochange`` and truncated to ``top_n``
    - pairs_long: each ranked pair in both directions, for per-file lookups
    - matrix: every counted pair in both directions, for heatmaps, ordered by
      ``(a, b)``
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from ..history.models import Commit
from ..logging_config import get_logger
from .combinatorics import unique_pairs
from .models import CouplingCell, CouplingLink, CouplingPair, CouplingResult, Hotspot

logger = get_logger(__name__)


def count_cochanges(
    commits: Sequence[Commit], universe: set[str]
) -> dict[tuple[str, str], int]:
    """Co-change counts for canonical pairs of universe files.

    A pair only gets an entry once it has co-occurred in some commit.
    """
    counts: dict[tuple[str, str], int] = defaultdict(int)
    for commit in commits:
        paths = [p for p in dict.fromkeys(f.path for f in commit.files) if p in universe]
        for a, b in unique_pairs(paths):
            key = (a, b) if a < b else (b, a)
            counts[key] += 1
    return dict(counts)


def temporal_coupling(
    commits: Sequence[Commit],
    hotspots: Sequence[Hotspot],
    min_cochange: int = 3,
    top_k: int = 25,
    top_n: int = 100,
) -> CouplingResult:
    """Compute temporal coupling among the top-K hotspot files.

    Args:
        commits: Commit stream
        hotspots: Hotspots in hotness order (see compute_hotspots)
        min_cochange: Minimum shared commits for a ranked pair
        top_k: Size of the file universe (floored to 1)
        top_n: Maximum ranked pairs returned (floored to 1)
    """
    touches = {h.path: h.change_count for h in hotspots}
    universe = {h.path for h in hotspots[: max(1, int(top_k))]}

    counts = count_cochanges(commits, universe)

    ranked = []
    for (a, b), count in counts.items():
        if count < min_cochange:
            continue
        ta = max(1, touches.get(a, 1))
        tb = max(1, touches.get(b, 1))
        ranked.append(
            CouplingPair(a=a, b=b, co_change_count=count, support_pct=count / min(ta, tb))
        )
    ranked.sort(key=lambda p: (-p.co_change_count, -p.support_pct, p.a, p.b))
    pairs = ranked[: max(1, int(top_n))]

    pairs_long = []
    for p in pairs:
        pairs_long.append(CouplingLink(p.a, p.b, p.co_change_count, p.support_pct))
        pairs_long.append(CouplingLink(p.b, p.a, p.co_change_count, p.support_pct))

    matrix = []
    for (a, b), count in counts.items():
        matrix.append(CouplingCell(a, b, count))
        matrix.append(CouplingCell(b, a, count))
    matrix.sort(key=lambda c: (c.a, c.b))

    logger.debug(
        "Coupling: %d files in universe, %d counted pairs, %d ranked",
        len(universe),
        len(counts),
        len(pairs),
    )
    return CouplingResult(pairs=pairs, pairs_long=pairs_long, matrix=matrix)
