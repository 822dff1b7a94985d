"""Public API for riskmap.

Example:
    >>> from riskmap import analyze
    >>>
    >>> report = analyze("/path/to/repo", since="2025-01-01")
    >>> report.risk[0].path
    'src/core.clj'
    >>>
    >>> # Overrides use section__field names
    >>> report = analyze(".", coupling__min_cochange=5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .config import load_config
from .logging_config import get_logger
from .pipeline import RiskReport, RunParams, build_report

logger = get_logger(__name__)


def analyze(
    repo: str = ".",
    config_file: Optional[Path] = None,
    since: Optional[str] = None,
    until: Optional[str] = None,
    branch: Optional[str] = None,
    all_refs: bool = True,
    no_merges: bool = True,
    path: Optional[str] = None,
    workers: Optional[int] = None,
    **overrides: Any,
) -> RiskReport:
    """Analyze a repository's history and return every risk table.

    Args:
        repo: Repository root (default: current directory)
        config_file: Optional TOML file replacing ``<repo>/riskmap.toml``
        since: Only commits after this day (YYYY-MM-DD)
        until: Only commits before this day; also the staleness reference day
        branch: Revision to walk when ``all_refs`` is False
        all_refs: Walk all refs
        no_merges: Skip merge commits
        path: Restrict history to this sub-directory
        workers: Thread count for complexity analysis (None = auto)
        **overrides: Configuration overrides as ``section__field=value``

    Raises:
        RiskmapError: If configuration is invalid or history cannot be read
    """
    config = load_config(repo, config_file=config_file, **overrides)
    params = RunParams(
        since=since,
        until=until,
        branch=branch,
        all=all_refs,
        no_merges=no_merges,
        path=path,
    )
    logger.info(f"Starting analysis of {repo}")
    return build_report(repo, config=config, params=params, workers=workers)
