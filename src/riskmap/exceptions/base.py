"""Root of the riskmap exception hierarchy."""

from collections.abc import Mapping
from typing import Any, Optional


class RiskmapError(Exception):
    """Base exception for all riskmap errors.

    ``details`` holds the context a caller may want to log or display
    (paths, reasons, the git command that failed). Values are rendered
    with ``str()`` when the error is printed.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
