"""Shared CLI helpers."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from ..config import load_config
from ..exceptions import RiskmapError
from ..logging_config import setup_logging
from ..pipeline import RiskReport, RunParams, build_report

console = Console()


def default_export_path(now: Optional[datetime] = None) -> Path:
    """``riskmap-data-<YYYYmmdd-HHMMSS>.json`` in the working directory."""
    now = now or datetime.now()
    return Path(f"riskmap-data-{now:%Y%m%d-%H%M%S}.json")


def run_analysis(
    repo: Path,
    config: Optional[Path],
    since: Optional[str],
    until: Optional[str],
    branch: Optional[str],
    all_refs: bool,
    no_merges: bool,
    path: Optional[str],
    top: int,
    workers: Optional[int],
) -> RiskReport:
    """Build config and run parameters from CLI options, then analyze."""
    settings = load_config(repo, config_file=config)
    params = RunParams(
        since=since,
        until=until,
        branch=branch,
        all=all_refs,
        no_merges=no_merges,
        path=path,
        top_n=top,
    )
    return build_report(repo, config=settings, params=params, workers=workers)


def write_json(data: dict[str, Any], out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(data, indent=2), encoding="utf-8")


def guarded(action, verbose: bool, quiet: bool) -> None:
    """Run ``action`` with logging configured and errors mapped to exit codes.

    Known errors exit 1 with a one-line message, Ctrl-C exits 130.
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)
    try:
        action()

    except typer.Exit:
        raise

    except RiskmapError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
