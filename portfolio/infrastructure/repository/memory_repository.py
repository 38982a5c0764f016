"""In-memory project repository with per-owner seed data."""

from __future__ import annotations

from collections.abc import Iterable

from portfolio.core.models.project import PortfolioProject


class InMemoryProjectRepository:
    """Deterministic repository returning whatever was seeded for an owner."""

    def __init__(self, projects: Iterable[PortfolioProject] = ()) -> None:
        self._projects: dict[str, list[PortfolioProject]] = {}
        self.fetch_count = 0
        for project in projects:
            self.add(project)

    def add(self, project: PortfolioProject) -> None:
        self._projects.setdefault(project.owner_id, []).append(project)

    async def fetch_projects(self, owner_id: str) -> list[PortfolioProject]:
        self.fetch_count += 1
        return list(self._projects.get(owner_id, []))
