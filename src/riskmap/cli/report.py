"""Report command: render risk tables in the terminal."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..formatters import JsonFormatter, RichFormatter, get_formatter
from . import app
from ._common import console, guarded, run_analysis, write_json


@app.command()
def report(
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-r",
        help="Repository root to analyze",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format",
        click_type=click.Choice(["rich", "json", "csv"], case_sensitive=False),
    ),
    top: int = typer.Option(30, "--top", "-t", help="Rows per table", min=1),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Also write the JSON report to this path"
    ),
    include_raw: bool = typer.Option(
        True, "--include-raw/--no-raw", help="Embed the commit stream in JSON output"
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
    Show the riskiest files, hotspots, coupled pairs, knowledge loss
    and directory rollup.

    [bold cyan]Examples:[/bold cyan]

      riskmap report

      riskmap report --top 10 --format csv

      riskmap report --out report.json
    """

    def _run() -> None:
        result = run_analysis(
            repo, config, since, until, branch, all_refs, no_merges, path, top, workers
        )
        name = fmt.lower()
        if name == "rich":
            formatter = RichFormatter(console=console)
        elif name == "json":
            formatter = JsonFormatter(include_raw=include_raw)
        else:
            formatter = get_formatter(name)
        formatter.render(result, top_n=top)

        if out is not None:
            write_json(result.to_dict(include_raw=include_raw), out)
            if name == "rich":
                console.print(f"[green]Wrote[/green] {out}")

    guarded(_run, verbose=verbose, quiet=quiet)
