"""
Portfolio project models.

``PortfolioProject`` is the stored entity. ``ProjectDraft`` carries the
values needed to create one and ``ProjectPatch`` the explicitly-set fields
of a partial update, merged with ``apply_patch``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def generate_project_id() -> str:
    """Generate an opaque project id."""
    return str(uuid4())


# ============================================================================
# Entity
# ============================================================================


class PortfolioProject(BaseModel):
    """A single portfolio project owned by a profile.

    Attributes:
        id: Opaque unique identifier, immutable once assigned
        owner_id: Owning profile id
        title: Project title
        description: Project description
        technologies: Ordered technology names (display order matters)
        repository_url: Optional source repository link
        demo_url: Optional live demo link
        thumbnail_url: Optional thumbnail image
        images: Ordered image links
        completed_at: Completion timestamp
        featured: Whether the project is shown in the featured section
    """

    id: str = Field(description="Unique project id")
    owner_id: str = Field(description="Owning profile id")
    title: str
    description: str
    technologies: list[str] = Field(default_factory=list)
    repository_url: Optional[str] = None
    demo_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    completed_at: datetime
    featured: bool = False

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        marker = "*" if self.featured else " "
        return f"[{marker}] {self.title} ({self.id})"


# ============================================================================
# Inputs
# ============================================================================


class ProjectDraft(BaseModel):
    """Values for a project that has not been stored yet."""

    owner_id: str
    title: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    repository_url: Optional[str] = None
    demo_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    completed_at: Optional[datetime] = None
    featured: Optional[bool] = None

    def missing_required_fields(self) -> list[str]:
        """Names of required fields that are empty (whitespace counts as empty)."""
        return missing_required_fields(self.title, self.description, self.technologies)


class ProjectPatch(BaseModel):
    """Partial update for a stored project.

    Only fields that were explicitly set (including explicit ``None``) are
    applied. ``id`` and ``owner_id`` cannot be patched.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[list[str]] = None
    repository_url: Optional[str] = None
    demo_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    images: Optional[list[str]] = None
    completed_at: Optional[datetime] = None
    featured: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in this patch."""
        return self.model_dump(exclude_unset=True)


# Fields that may never hold None on a stored project
_NON_NULLABLE = ("title", "description", "technologies", "images", "completed_at", "featured")


def apply_patch(project: PortfolioProject, patch: ProjectPatch) -> PortfolioProject:
    """Merge ``patch`` onto ``project`` and return the updated copy.

    Fields absent from the patch keep their current value. An explicit
    ``None`` clears an optional link; for non-nullable fields it is ignored.
    """
    changes = {
        name: value
        for name, value in patch.changes().items()
        if value is not None or name not in _NON_NULLABLE
    }
    for name in ("technologies", "images"):
        if name in changes:
            changes[name] = list(changes[name])
    return project.model_copy(update=changes)


def missing_required_fields(
    title: str | None,
    description: str | None,
    technologies: list[str] | None,
) -> list[str]:
    """Return the required fields that are empty."""
    missing = []
    if not (title or "").strip():
        missing.append("title")
    if not (description or "").strip():
        missing.append("description")
    if not [tech for tech in technologies or [] if tech.strip()]:
        missing.append("technologies")
    return missing
