"""
In-memory entity store for portfolio projects.

Holds the collection for one manager instance and notifies synchronous
listeners after every change so derived views can be recomputed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import TypeAlias

from portfolio.core.errors import NotFoundError, ValidationError
from portfolio.core.models.project import (
    PortfolioProject,
    ProjectDraft,
    ProjectPatch,
    apply_patch,
    generate_project_id,
)

logger = logging.getLogger(__name__)

StoreListener: TypeAlias = Callable[[list[PortfolioProject]], None]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ProjectStore:
    """Ordered collection of projects with create/update/delete/list."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_project_id,
    ) -> None:
        self._projects: list[PortfolioProject] = []
        self._listeners: list[StoreListener] = []
        self._clock = clock
        self._id_factory = id_factory

    def __len__(self) -> int:
        return len(self._projects)

    def __contains__(self, project_id: object) -> bool:
        return any(project.id == project_id for project in self._projects)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[PortfolioProject]:
        """Current projects in insertion order."""
        return list(self._projects)

    def get(self, project_id: str) -> PortfolioProject:
        """Return the project with ``project_id`` or raise NotFoundError."""
        return self._projects[self._index_of(project_id)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, draft: ProjectDraft) -> PortfolioProject:
        """Store a new project built from ``draft``.

        A fresh id is assigned, ``completed_at`` defaults to now and
        ``featured`` to False.

        Raises:
            ValidationError: title, description or technologies is empty
        """
        missing = draft.missing_required_fields()
        if missing:
            raise ValidationError(missing)

        project = PortfolioProject(
            id=self._new_id(),
            owner_id=draft.owner_id,
            title=draft.title,
            description=draft.description,
            technologies=list(draft.technologies),
            repository_url=draft.repository_url,
            demo_url=draft.demo_url,
            thumbnail_url=draft.thumbnail_url,
            images=list(draft.images),
            completed_at=draft.completed_at or self._clock(),
            featured=bool(draft.featured),
        )
        self._projects.append(project)
        logger.debug(f"Created project {project.id} ('{project.title}')")
        self._notify()
        return project

    def update(self, project_id: str, patch: ProjectPatch) -> PortfolioProject:
        """Merge ``patch`` onto the project with ``project_id``.

        Raises:
            NotFoundError: no project with that id exists
        """
        index = self._index_of(project_id)
        updated = apply_patch(self._projects[index], patch)
        self._projects[index] = updated
        logger.debug(
            f"Updated project {project_id}: {sorted(patch.changes())}"
        )
        self._notify()
        return updated

    def delete(self, project_id: str) -> None:
        """Remove the project with ``project_id``; absent ids are ignored."""
        remaining = [p for p in self._projects if p.id != project_id]
        if len(remaining) == len(self._projects):
            logger.debug(f"Delete ignored, project {project_id} not present")
            return
        self._projects = remaining
        logger.debug(f"Deleted project {project_id}")
        self._notify()

    def replace_all(self, projects: Iterable[PortfolioProject]) -> None:
        """Install a freshly loaded collection, keeping the first of any duplicate ids."""
        seen: set[str] = set()
        unique: list[PortfolioProject] = []
        for project in projects:
            if project.id in seen:
                logger.warning(f"Dropping duplicate project id {project.id}")
                continue
            seen.add(project.id)
            unique.append(project)
        self._projects = unique
        self._notify()

    def clear(self) -> None:
        if self._projects:
            self._projects = []
            self._notify()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> None:
        """Register a listener called with the new snapshot after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.list()
        for listener in list(self._listeners):
            listener_name = getattr(listener, "__name__", str(listener))
            try:
                listener(snapshot)
            except Exception as exc:
                logger.exception(
                    f"Store listener error in '{listener_name}'",
                    exc_info=exc,
                )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, project_id: str) -> int:
        for index, project in enumerate(self._projects):
            if project.id == project_id:
                return index
        raise NotFoundError(project_id)

    def _new_id(self) -> str:
        project_id = self._id_factory()
        while project_id in self:
            project_id = self._id_factory()
        return project_id
