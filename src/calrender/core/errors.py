from __future__ import annotations
from typing import Optional


class CalrenderError(Exception):
    """Base error."""


class ConfigurationError(CalrenderError, ValueError):
    """Raised when a calendar configuration is rejected before rendering starts."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RenderingError(CalrenderError):
    """Raised when a vector document cannot be produced or converted to print."""
