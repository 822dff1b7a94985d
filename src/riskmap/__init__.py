"""
riskmap - engineering-risk signals from a repository's commit history.

Churn hotspots, ownership distribution, temporal coupling, per-function
complexity and a composite risk score, plus staleness and knowledge-loss
indicators.
"""

__version__ = "0.1.0"

from .api import analyze
from .pipeline import RiskReport, RunParams, analyze_commits, build_report

__all__ = [
    "analyze",
    "analyze_commits",
    "build_report",
    "RiskReport",
    "RunParams",
]
