"""Base formatter interface for riskmap output rendering."""

from abc import ABC, abstractmethod

from ..pipeline import RiskReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: RiskReport, top_n: int = 30) -> None:
        """Render the report to stdout."""

    @abstractmethod
    def format(self, report: RiskReport, top_n: int = 30) -> str:
        """Return formatted string representation of the report."""
