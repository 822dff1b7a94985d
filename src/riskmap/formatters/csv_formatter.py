"""CSV formatter for riskmap (risk table)."""

import csv
import io

from ..pipeline import RiskReport
from .base import BaseFormatter

RISK_COLUMNS = [
    "path",
    "risk_score",
    "churn_score",
    "cc_score",
    "ownership_score",
    "change_count",
    "churn_lines",
    "cc_sum",
    "top1_pct",
]


class CsvFormatter(BaseFormatter):
    """Render the top ``top_n`` risk rows as CSV."""

    def render(self, report: RiskReport, top_n: int = 30) -> None:
        print(self.format(report, top_n), end="")

    def format(self, report: RiskReport, top_n: int = 30) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(RISK_COLUMNS)
        for r in report.risk[:top_n]:
            writer.writerow([
                r.path, f"{r.risk_score:.4f}", f"{r.churn_score:.4f}",
                f"{r.cc_score:.4f}", f"{r.ownership_score:.4f}",
                r.change_count, r.churn_lines, r.cc_sum, f"{r.top1_pct:.4f}",
            ])
        return output.getvalue()
