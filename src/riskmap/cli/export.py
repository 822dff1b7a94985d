"""Export command: write the full report as JSON."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import console, default_export_path, guarded, run_analysis, write_json


@app.command()
def export(
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-r",
        help="Repository root to analyze",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output JSON path (default: riskmap-data-<timestamp>.json)",
    ),
    since: Optional[str] = typer.Option(None, "--since", help="Only commits after this day"),
    until: Optional[str] = typer.Option(
        None, "--until", help="Only commits before this day (also the staleness reference)"
    ),
    branch: Optional[str] = typer.Option(
        None, "--branch", help="Revision to walk when --no-all is given"
    ),
    all_refs: bool = typer.Option(True, "--all/--no-all", help="Walk all refs"),
    no_merges: bool = typer.Option(True, "--no-merges/--merges", help="Skip merge commits"),
    path: Optional[str] = typer.Option(None, "--path", help="Restrict history to a subdirectory"),
    include_raw: bool = typer.Option(
        False, "--include-raw/--no-raw", help="Embed the filtered commit stream"
    ),
    top: int = typer.Option(30, "--top", "-t", help="Default table length recorded in params", min=1),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers for complexity analysis (default: auto-detect)",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Analyze history and write every table to a JSON file.

    [bold cyan]Examples:[/bold cyan]

      riskmap export

      riskmap export --since 2025-01-01 --out data.json --include-raw
    """

    def _run() -> None:
        report = run_analysis(
            repo, config, since, until, branch, all_refs, no_merges, path, top, workers
        )
        target = out or default_export_path()
        write_json(report.to_dict(include_raw=include_raw), target)
        console.print(f"[green]Wrote[/green] {target}")

    guarded(_run, verbose=verbose, quiet=quiet)
