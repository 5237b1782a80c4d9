"""Error types shared by the plot structure services."""

from __future__ import annotations

from typing import Dict, List, Optional


class PlotlineError(RuntimeError):
    """Base class for errors raised by the service layer."""


class NotFoundError(PlotlineError):
    """Raised when a referenced template, plot structure or section does not exist."""


class InvalidInputError(PlotlineError):
    """Raised when submitted or stored data fails validation."""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, List[str]] = errors or {}


class InvalidTemplateError(InvalidInputError):
    """Raised when a template's section definitions are malformed."""
