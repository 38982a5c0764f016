"""
Derived display views over the stored projects.

The functions are pure; ``ProjectViewProjector`` keeps their results cached
and recomputes them whenever its store changes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from portfolio.core.models.project import PortfolioProject
from portfolio.domain.store import ProjectStore

DEFAULT_TECHNOLOGY_PREVIEW_LIMIT = 3


@dataclass(frozen=True)
class ProjectCard:
    """A project plus its truncated technology list for compact display."""

    project: PortfolioProject
    visible_technologies: tuple[str, ...]
    hidden_technology_count: int

    @property
    def overflow_label(self) -> str | None:
        """Text such as "+2" when technologies were cut, else None."""
        if self.hidden_technology_count:
            return f"+{self.hidden_technology_count}"
        return None


def featured_projects(projects: Sequence[PortfolioProject]) -> list[PortfolioProject]:
    """Projects flagged as featured, in store order."""
    return [project for project in projects if project.featured]


def has_featured(projects: Sequence[PortfolioProject]) -> bool:
    return any(project.featured for project in projects)


def all_projects_view(
    projects: Sequence[PortfolioProject],
    preview_limit: int = DEFAULT_TECHNOLOGY_PREVIEW_LIMIT,
) -> list[ProjectCard]:
    """Every project as a card showing at most ``preview_limit`` technologies."""
    if preview_limit < 0:
        raise ValueError("preview_limit must not be negative")
    return [
        ProjectCard(
            project=project,
            visible_technologies=tuple(project.technologies[:preview_limit]),
            hidden_technology_count=max(len(project.technologies) - preview_limit, 0),
        )
        for project in projects
    ]


class ProjectViewProjector:
    """Keeps featured/all partitions in sync with a store."""

    def __init__(
        self,
        store: ProjectStore,
        preview_limit: int = DEFAULT_TECHNOLOGY_PREVIEW_LIMIT,
    ) -> None:
        self.store = store
        self.preview_limit = preview_limit
        self.featured: list[PortfolioProject] = []
        self.cards: list[ProjectCard] = []
        self.refresh(store.list())
        store.subscribe(self.refresh)

    @property
    def has_featured(self) -> bool:
        return bool(self.featured)

    def refresh(self, projects: list[PortfolioProject]) -> None:
        self.featured = featured_projects(projects)
        self.cards = all_projects_view(projects, self.preview_limit)

    def detach(self) -> None:
        self.store.unsubscribe(self.refresh)
