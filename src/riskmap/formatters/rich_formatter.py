"""Rich terminal formatter for riskmap."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..pipeline import RiskReport
from .base import BaseFormatter


def _risk_label(score: float) -> str:
    if score >= 0.75:
        return "[red bold]critical[/red bold]"
    elif score >= 0.5:
        return "[red]high[/red]"
    elif score >= 0.25:
        return "[yellow]moderate[/yellow]"
    else:
        return "[green]low[/green]"


def _days(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


class RichFormatter(BaseFormatter):
    """Summary panel followed by one table per analysis view."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: RiskReport, top_n: int = 30) -> None:
        self._print_summary(report)
        self._print_risk(report, top_n)
        self._print_hotspots(report, top_n)
        self._print_coupling(report, top_n)
        self._print_knowledge_loss(report, top_n)
        self._print_directories(report, top_n)

    def format(self, report: RiskReport, top_n: int = 30) -> str:
        # Rich output goes directly to console; return empty string
        self.render(report, top_n)
        return ""

    # -- private helpers --

    def _print_summary(self, report: RiskReport) -> None:
        authors = {row.author for row in report.ownership_long}
        functions = len(report.complexity_functions)
        summary_text = (
            f"[bold]{len(report.commits)}[/bold] commits  |  "
            f"[bold]{len(report.hotspots)}[/bold] files  |  "
            f"[bold]{len(authors)}[/bold] authors  |  "
            f"[bold]{functions}[/bold] functions measured  |  "
            f"reference day [cyan]{report.until_day or 'n/a'}[/cyan]"
        )
        self.console.print(
            Panel(
                summary_text,
                title=f"[bold cyan]{report.config.report.title}[/bold cyan]",
                expand=False,
            )
        )
        self.console.print()

    def _print_risk(self, report: RiskReport, top_n: int) -> None:
        if not report.risk:
            self.console.print("[green]No files changed in the selected history.[/green]")
            return
        rows = report.risk[:top_n]
        table = Table(title=f"Top {len(rows)} Files by Risk", expand=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("File", style="yellow", no_wrap=False, ratio=3)
        table.add_column("Risk", justify="right")
        table.add_column("Level")
        table.add_column("Churn", justify="right")
        table.add_column("CC", justify="right")
        table.add_column("Ownership", justify="right")
        table.add_column("Changes", justify="right")
        table.add_column("CC sum", justify="right")
        table.add_column("Top owner", justify="right")
        for i, r in enumerate(rows, 1):
            table.add_row(
                str(i),
                r.path,
                f"{r.risk_score:.3f}",
                _risk_label(r.risk_score),
                f"{r.churn_score:.2f}",
                f"{r.cc_score:.2f}",
                f"{r.ownership_score:.2f}",
                str(r.change_count),
                str(r.cc_sum),
                f"{r.top1_pct:.0%}",
            )
        self.console.print(table)
        self.console.print()

    def _print_hotspots(self, report: RiskReport, top_n: int) -> None:
        if not report.hotspots:
            return
        rows = report.hotspots[:top_n]
        table = Table(title=f"Top {len(rows)} Hotspots", expand=True)
        table.add_column("File", style="yellow", ratio=3)
        table.add_column("Changes", justify="right")
        table.add_column("Churn", justify="right")
        table.add_column("Last touched")
        for h in rows:
            table.add_row(h.path, str(h.change_count), str(h.churn_lines), h.last_touched_at)
        self.console.print(table)
        self.console.print()

    def _print_coupling(self, report: RiskReport, top_n: int) -> None:
        pairs = report.coupling.pairs[:top_n]
        if not pairs:
            self.console.print(
                f"[dim]No file pairs changed together at least "
                f"{report.config.coupling.min_cochange} times.[/dim]"
            )
            self.console.print()
            return
        table = Table(title="Temporal Coupling", expand=True)
        table.add_column("File A", style="yellow", ratio=2)
        table.add_column("File B", style="yellow", ratio=2)
        table.add_column("Co-changes", justify="right")
        table.add_column("Support", justify="right")
        for p in pairs:
            table.add_row(p.a, p.b, str(p.co_change_count), f"{p.support_pct:.0%}")
        self.console.print(table)
        self.console.print()

    def _print_knowledge_loss(self, report: RiskReport, top_n: int) -> None:
        if not report.knowledge_loss:
            return
        rows = report.knowledge_loss[:top_n]
        table = Table(title="Knowledge Loss", expand=True)
        table.add_column("File", style="yellow", ratio=3)
        table.add_column("Top author")
        table.add_column("Share", justify="right")
        table.add_column("Last seen")
        table.add_column("Days", justify="right")
        for r in rows:
            table.add_row(
                r.path, r.top_author, f"{r.top1_pct:.0%}", r.last_seen, _days(r.loss_days)
            )
        self.console.print(table)
        self.console.print()

    def _print_directories(self, report: RiskReport, top_n: int) -> None:
        if not report.hotspots_dirs:
            return
        rows = report.hotspots_dirs[:top_n]
        table = Table(title="Directories", expand=True)
        table.add_column("Directory", style="cyan", ratio=3)
        table.add_column("Files", justify="right")
        table.add_column("Changes", justify="right")
        table.add_column("Churn", justify="right")
        for d in rows:
            table.add_row(d.dir, str(d.file_count), str(d.change_count), str(d.churn_lines))
        self.console.print(table)
        self.console.print()
