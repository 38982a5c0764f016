"""
Exception types for the portfolio manager.

Every error raised by the store, the form controller and the loader derives
from ``PortfolioError`` so the manager can handle them at one boundary.
"""

from __future__ import annotations

from collections.abc import Iterable


class PortfolioError(Exception):
    """Base exception for portfolio manager errors."""


class ValidationError(PortfolioError):
    """Required project fields are missing."""

    def __init__(self, fields: Iterable[str], message: str | None = None):
        self.fields = tuple(fields)
        if message is None:
            message = f"Missing required field(s): {', '.join(self.fields)}"
        super().__init__(message)


class NotFoundError(PortfolioError, LookupError):
    """No project with the requested id exists."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class LoadError(PortfolioError):
    """Fetching the initial projects for an owner failed."""

    def __init__(self, owner_id: str, message: str | None = None):
        self.owner_id = owner_id
        super().__init__(message or f"Failed to load projects for owner {owner_id}")


class FormStateError(PortfolioError):
    """A form operation was called in a state that does not allow it."""


class ProfileUnavailableError(PortfolioError):
    """No ready owner profile is available."""
