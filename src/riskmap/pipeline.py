"""End-to-end run: commit stream in, analytic tables out.

Stages, in order:
    aliases -> exclusions -> daily activity, hotspots, directory rollup,
    ownership -> staleness, knowledge loss -> complexity (hottest files)
    -> coupling -> risk
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import DEFAULT_CONFIG, RiskmapConfig
from .history import Commit, GitExtractor, apply_aliases, apply_excludes
from .logging_config import get_logger
from .metrics import (
    ComplexityRecord,
    CouplingResult,
    DailyActivity,
    DirectoryHotspot,
    Hotspot,
    KnowledgeLossRow,
    OwnershipRow,
    RiskRow,
    StalenessRow,
    complexity_functions,
    compute_hotspots,
    compute_knowledge_loss,
    compute_ownership,
    compute_risk,
    compute_staleness,
    hotspots_by_dir,
    resolve_until_day,
    temporal_coupling,
    timeseries_by_day,
)

logger = get_logger(__name__)

SCHEMA_VERSION = "1.0"


def _rows(items: Sequence[Any]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in items]


@dataclass(frozen=True)
class RunParams:
    """History selection for one run, echoed into the report."""

    since: Optional[str] = None
    until: Optional[str] = None
    branch: Optional[str] = None
    all: bool = True
    no_merges: bool = True
    path: Optional[str] = None
    top_n: int = 30  # default table length for renderers


@dataclass(frozen=True)
class RiskReport:
    repo_root: str
    head: Optional[str]
    params: RunParams
    config: RiskmapConfig
    timeseries: list[DailyActivity]
    hotspots: list[Hotspot]
    hotspots_dirs: list[DirectoryHotspot]
    ownership_long: list[OwnershipRow]
    until_day: str
    staleness: list[StalenessRow]
    knowledge_loss: list[KnowledgeLossRow]
    complexity_functions: list[ComplexityRecord]
    coupling: CouplingResult
    risk: list[RiskRow]
    commits: list[Commit] = field(default_factory=list)

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "repo": {"root": self.repo_root, "head": self.head},
            "params": asdict(self.params),
            "ui_defaults": {
                "risk": asdict(self.config.risk),
                "coupling": asdict(self.config.coupling),
            },
            "report": asdict(self.config.report),
            "until_day": self.until_day,
            "timeseries": _rows(self.timeseries),
            "hotspots": _rows(self.hotspots),
            "hotspots_dirs": _rows(self.hotspots_dirs),
            "ownership_long": _rows(self.ownership_long),
            "staleness": _rows(self.staleness),
            "knowledge_loss": _rows(self.knowledge_loss),
            "complexity_functions": _rows(self.complexity_functions),
            "coupling_pairs": _rows(self.coupling.pairs),
            "coupling_pairs_long": _rows(self.coupling.pairs_long),
            "coupling_matrix": _rows(self.coupling.matrix),
            "risk": _rows(self.risk),
            "raw": None,
        }
        if include_raw:
            raw = [c.to_raw() for c in self.commits]
            days = sorted(c["date_day"] for c in raw)
            data["raw"] = {
                "commits": raw,
                "authors": sorted({c["author"] for c in raw}),
                "min_day": days[0] if days else None,
                "max_day": days[-1] if days else None,
            }
        return data


def analyze_commits(
    commits: Sequence[Commit],
    repo: str | Path = ".",
    config: RiskmapConfig = DEFAULT_CONFIG,
    params: Optional[RunParams] = None,
    head: Optional[str] = None,
    workers: Optional[int] = None,
) -> RiskReport:
    """Run every metric over an already-read commit stream.

    Aliases and exclusions from ``config`` are applied first. Complexity
    reads source files under ``repo``.
    """
    params = params or RunParams()

    commits = apply_aliases(commits, config.authors.aliases)
    commits = apply_excludes(
        commits,
        paths=config.exclude.paths,
        globs=config.exclude.globs,
        commit_prefixes=config.exclude.commits,
    )
    logger.info("Analyzing %d commits after filtering", len(commits))

    timeseries = timeseries_by_day(commits)
    hotspots = compute_hotspots(commits)
    hotspots_dirs = hotspots_by_dir(hotspots, config.rollup.depth)
    ownership = compute_ownership(commits)
    logger.debug("%d hotspot files, %d ownership rows", len(hotspots), len(ownership))

    until_day = resolve_until_day(commits, params.until)
    staleness = compute_staleness(hotspots, until_day)
    knowledge_loss = compute_knowledge_loss(hotspots, ownership, until_day)

    hot_paths = [h.path for h in hotspots[: config.hotspots.top_n]]
    complexity = complexity_functions(repo, hot_paths, workers=workers)
    logger.debug("%d functions measured", len(complexity))

    coupling = temporal_coupling(
        commits,
        hotspots,
        min_cochange=config.coupling.min_cochange,
        top_k=config.coupling.top_k,
        top_n=config.coupling.top_n,
    )
    risk = compute_risk(hotspots, complexity, ownership, config.risk)

    return RiskReport(
        repo_root=str(Path(repo).resolve()),
        head=head,
        params=params,
        config=config,
        timeseries=timeseries,
        hotspots=hotspots,
        hotspots_dirs=hotspots_dirs,
        ownership_long=ownership,
        until_day=until_day,
        staleness=staleness,
        knowledge_loss=knowledge_loss,
        complexity_functions=complexity,
        coupling=coupling,
        risk=risk,
        commits=list(commits),
    )


def build_report(
    repo: str | Path = ".",
    config: RiskmapConfig = DEFAULT_CONFIG,
    params: Optional[RunParams] = None,
    workers: Optional[int] = None,
) -> RiskReport:
    """Read the repository's history and analyze it.

    Raises:
        GitHistoryError: If git log fails for the repository
    """
    params = params or RunParams()
    extractor = GitExtractor(
        str(repo),
        all_refs=params.all,
        branch=params.branch,
        no_merges=params.no_merges,
        since=params.since,
        until=params.until,
        path=params.path,
        exclude_pathspecs=config.exclude.git_pathspecs,
    )
    commits = extractor.extract()
    return analyze_commits(
        commits,
        repo=repo,
        config=config,
        params=params,
        head=extractor.head_sha(),
        workers=workers,
    )
