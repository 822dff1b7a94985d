"""Metrics pipeline: pure aggregations over the commit stream."""

from .combinatorics import unique_pairs
from .complexity import FileAnalysis, analyze_files, complexity_functions
from .coupling import temporal_coupling
from .hotspots import compute_hotspots, hotspots_by_dir, timeseries_by_day
from .models import (
    ComplexityRecord,
    CouplingCell,
    CouplingLink,
    CouplingPair,
    CouplingResult,
    DailyActivity,
    DirectoryHotspot,
    Hotspot,
    KnowledgeLossRow,
    OwnershipRow,
    RiskRow,
    StalenessRow,
)
from .normalization import min_max_normalize
from .ownership import compute_ownership
from .risk import compute_risk
from .staleness import compute_knowledge_loss, compute_staleness, resolve_until_day

__all__ = [
    "ComplexityRecord",
    "CouplingCell",
    "CouplingLink",
    "CouplingPair",
    "CouplingResult",
    "DailyActivity",
    "DirectoryHotspot",
    "FileAnalysis",
    "Hotspot",
    "KnowledgeLossRow",
    "OwnershipRow",
    "RiskRow",
    "StalenessRow",
    "analyze_files",
    "complexity_functions",
    "compute_hotspots",
    "compute_knowledge_loss",
    "compute_ownership",
    "compute_risk",
    "compute_staleness",
    "hotspots_by_dir",
    "min_max_normalize",
    "resolve_until_day",
    "temporal_coupling",
    "timeseries_by_day",
    "unique_pairs",
]
