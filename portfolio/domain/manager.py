"""
Portfolio manager.

Wires the store, form controller, view projector and loader together for one
owner at a time, and is the boundary where their errors are handled: a
failed submission keeps the form open, a failed load leaves an empty list.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Optional, TypeAlias

from portfolio.core.errors import LoadError, PortfolioError
from portfolio.core.models.profile import OwnerProfile
from portfolio.core.models.project import PortfolioProject
from portfolio.domain.form import FormController
from portfolio.domain.loader import ProjectLoader
from portfolio.domain.store import ProjectStore
from portfolio.domain.views import DEFAULT_TECHNOLOGY_PREVIEW_LIMIT, ProjectViewProjector
from portfolio.infrastructure.repository.base import ProjectRepository
from portfolio.utils.logging import log_error, log_operation

logger = logging.getLogger(__name__)

ConfirmPrompt: TypeAlias = Callable[[PortfolioProject], bool]


class ManagerStatus(str, Enum):
    """What the manager can currently show."""
    NO_PROFILE = "no_profile"  # Ask the user to complete their profile
    LOADING = "loading"        # Initial load in flight
    READY = "ready"


class PortfolioManager:
    """Portfolio projects of the current owner.

    Args:
        repository: Source of the initial projects
        confirm: Yes/no gate asked before a project is deleted
        preview_limit: Technologies shown per card in the all-projects view
        store: Optional pre-built store (e.g. with a fixed clock)
    """

    def __init__(
        self,
        repository: ProjectRepository,
        confirm: ConfirmPrompt,
        preview_limit: int = DEFAULT_TECHNOLOGY_PREVIEW_LIMIT,
        store: ProjectStore | None = None,
    ) -> None:
        self.store = store if store is not None else ProjectStore()
        self.form = FormController(self.store)
        self.views = ProjectViewProjector(self.store, preview_limit)
        self.loader = ProjectLoader(repository)
        self.confirm = confirm

        self.profile: Optional[OwnerProfile] = None
        self.is_loading = False
        self.load_error: Optional[LoadError] = None
        self.form_error: Optional[PortfolioError] = None
        self._load_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def owner_id(self) -> str | None:
        if self.profile is not None and self.profile.ready:
            return self.profile.id
        return None

    @property
    def status(self) -> ManagerStatus:
        if self.owner_id is None:
            return ManagerStatus.NO_PROFILE
        if self.is_loading:
            return ManagerStatus.LOADING
        return ManagerStatus.READY

    @property
    def projects(self) -> list[PortfolioProject]:
        return self.store.list()

    # ------------------------------------------------------------------
    # Owner changes and loading
    # ------------------------------------------------------------------

    def change_owner(self, profile: OwnerProfile | None) -> asyncio.Task | None:
        """Switch to ``profile`` and start loading its projects.

        A load still pending for the previous owner is cancelled so it can
        never write into the new owner's collection. Must be called from a
        running event loop when a ready profile is given.

        Returns:
            The load task, or None when no load was started
        """
        new_owner = profile.id if profile is not None and profile.ready else None
        if new_owner is not None and new_owner == self.owner_id:
            self.profile = profile
            return self._load_task

        self._cancel_pending_load()
        self.profile = profile
        self.form.cancel()
        self.form.owner_id = new_owner
        self.form_error = None
        self.load_error = None
        self.store.clear()

        if new_owner is None:
            self.is_loading = False
            logger.info("No owner profile available, portfolio suspended")
            return None

        self.is_loading = True
        self._load_task = asyncio.get_running_loop().create_task(self._run_load(new_owner))
        return self._load_task

    async def mount(self, profile: OwnerProfile | None) -> None:
        """Switch owner and wait until the resulting load has settled."""
        task = self.change_owner(profile)
        if task is not None:
            # asyncio.wait does not raise if the task gets cancelled meanwhile
            await asyncio.wait({task})

    async def close(self) -> None:
        """Cancel any pending load, e.g. when the view goes away."""
        task = self._load_task
        self._cancel_pending_load()
        self.is_loading = False
        if task is not None:
            await asyncio.wait({task})

    async def _run_load(self, owner_id: str) -> None:
        projects: list[PortfolioProject] = []
        try:
            projects = await self.loader.load(owner_id)
        except LoadError as exc:
            log_error(logger, "load projects", exc, owner_id=owner_id)
            if owner_id == self.owner_id:
                self.load_error = exc
        finally:
            # The loading flag belongs to the current owner only
            if owner_id == self.owner_id:
                self.is_loading = False
                self._load_task = None

        if owner_id != self.owner_id:
            logger.debug(f"Discarding stale load for owner {owner_id}")
            return

        self.store.replace_all(projects)

    def _cancel_pending_load(self) -> None:
        task = self._load_task
        self._load_task = None
        if task is not None and not task.done():
            task.cancel()
            logger.info("Cancelled pending project load")

    # ------------------------------------------------------------------
    # Form operations
    # ------------------------------------------------------------------

    def open_create(self) -> bool:
        if not self._ensure_ready("open create form"):
            return False
        self.form_error = None
        self.form.open_create()
        return True

    def open_edit(self, project_id: str) -> bool:
        if not self._ensure_ready("open edit form"):
            return False
        try:
            project = self.store.get(project_id)
        except PortfolioError as exc:
            self._record_form_error("open edit form", exc)
            return False
        self.form_error = None
        self.form.open_edit(project)
        return True

    def change_field(self, name: str, value: Any) -> bool:
        if not self._ensure_ready("change field"):
            return False
        try:
            self.form.change_field(name, value)
        except PortfolioError as exc:
            self._record_form_error("change field", exc)
            return False
        return True

    def submit_form(self) -> PortfolioProject | None:
        """Submit the form; on failure the form stays open and ``form_error`` is set."""
        if not self._ensure_ready("submit form"):
            return None
        editing = self.form.is_editing
        try:
            project = self.form.submit()
        except PortfolioError as exc:
            self._record_form_error("submit form", exc)
            return None
        self.form_error = None
        log_operation(
            logger,
            "Updated project" if editing else "Created project",
            id=project.id,
            title=project.title,
        )
        return project

    def cancel_form(self) -> None:
        self.form_error = None
        self.form.cancel()

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete_project(self, project_id: str) -> bool:
        """Delete a project after the confirmation prompt agrees.

        Returns:
            True when the project was removed
        """
        if not self._ensure_ready("delete project"):
            return False
        if project_id not in self.store:
            logger.debug(f"Delete skipped, project {project_id} not present")
            return False

        project = self.store.get(project_id)
        if not self.confirm(project):
            logger.info(f"Delete of project {project_id} declined")
            return False

        self.store.delete(project_id)
        log_operation(logger, "Deleted project", id=project_id, title=project.title)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_ready(self, operation: str) -> bool:
        status = self.status
        if status is ManagerStatus.READY:
            return True
        logger.warning(f"Ignoring '{operation}' while portfolio is {status.value}")
        return False

    def _record_form_error(self, operation: str, error: PortfolioError) -> None:
        self.form_error = error
        logger.warning(f"{operation} failed: {error}")
