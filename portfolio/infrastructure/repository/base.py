"""
Project repository protocol.

The loader only depends on this protocol, so a real backend can replace the
mock without touching the store or the form controller.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from portfolio.core.models.project import PortfolioProject


@runtime_checkable
class ProjectRepository(Protocol):
    """Source of the initial projects for an owner."""

    async def fetch_projects(self, owner_id: str) -> list[PortfolioProject]:
        """Return all projects owned by ``owner_id``."""
        ...
