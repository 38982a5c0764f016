"""Loader for an owner's initial portfolio projects."""

from __future__ import annotations

import logging
from typing import Any

from portfolio.core.errors import LoadError
from portfolio.core.models.project import PortfolioProject
from portfolio.infrastructure.repository.base import ProjectRepository

logger = logging.getLogger(__name__)


def _checked_payload(payload: Any) -> list[PortfolioProject]:
    if not isinstance(payload, (list, tuple)):
        raise TypeError(f"expected a list of projects, got {type(payload).__name__}")
    for item in payload:
        if not isinstance(item, PortfolioProject):
            raise TypeError(f"expected PortfolioProject items, got {type(item).__name__}")
    return list(payload)


class ProjectLoader:
    """Fetches the initial collection through a ``ProjectRepository``."""

    def __init__(self, repository: ProjectRepository) -> None:
        self.repository = repository

    async def load(self, owner_id: str) -> list[PortfolioProject]:
        """Fetch the projects owned by ``owner_id``.

        Projects reported for another owner are dropped.

        Raises:
            LoadError: the repository call failed or returned something
                other than a list of projects
        """
        logger.info(f"Loading projects for owner {owner_id}")
        try:
            projects = _checked_payload(await self.repository.fetch_projects(owner_id))
        except Exception as exc:
            raise LoadError(owner_id, f"Failed to load projects for owner {owner_id}: {exc}") from exc

        owned = []
        for project in projects:
            if project.owner_id != owner_id:
                logger.warning(
                    f"Ignoring project {project.id} owned by {project.owner_id}, expected {owner_id}"
                )
                continue
            owned.append(project)

        logger.info(f"Loaded {len(owned)} project(s) for owner {owner_id}")
        return owned
