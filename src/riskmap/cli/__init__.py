"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from ._common import console

app = typer.Typer(
    name="riskmap",
    help="riskmap - engineering-risk signals from git history",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _show_version(value: bool) -> None:
    if not value:
        return
    from .. import __version__

    console.print(f"[bold cyan]riskmap[/bold cyan] version [green]{__version__}[/green]")
    raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_show_version,
        is_eager=True,
    ),
):
    """
    Mine a repository's commit history for churn hotspots, ownership,
    temporal coupling, function complexity and a composite risk score.

    [bold cyan]Examples:[/bold cyan]

      riskmap report

      riskmap report --since 2025-01-01 --format json

      riskmap export --repo ../service --out data.json
    """


# Import subcommands to register them
from .export import export as _export  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
