"""Exception hierarchy for riskmap."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    GitHistoryError,
    ParsingError,
)
from .base import RiskmapError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "RiskmapError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "GitHistoryError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
