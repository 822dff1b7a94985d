"""JSON formatter for riskmap."""

import json

from ..pipeline import RiskReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the full report as JSON; ``top_n`` does not truncate tables."""

    def __init__(self, include_raw: bool = False):
        self.include_raw = include_raw

    def render(self, report: RiskReport, top_n: int = 30) -> None:
        print(self.format(report, top_n))

    def format(self, report: RiskReport, top_n: int = 30) -> str:
        return json.dumps(report.to_dict(include_raw=self.include_raw), indent=2)
