"""
Form state controller for adding and editing portfolio projects.

The form is a small state machine:

    Closed --open_create--> Creating --submit/cancel--> Closed
    any    --open_edit----> Editing(target_id) --submit/cancel--> Closed

The draft values live in a separate ``FormDraft`` record so that an editing
state can never exist without its target id.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

from portfolio.core.errors import FormStateError, ProfileUnavailableError, ValidationError
from portfolio.core.models.project import (
    PortfolioProject,
    ProjectDraft,
    ProjectPatch,
    missing_required_fields,
)
from portfolio.domain.parsers import clean_items, format_comma_list, parse_comma_list, parse_flag
from portfolio.domain.store import ProjectStore

logger = logging.getLogger(__name__)


# ============================================================================
# States
# ============================================================================


@dataclass(frozen=True)
class Closed:
    """No draft in progress."""


@dataclass(frozen=True)
class Creating:
    """A blank draft is being filled in."""


@dataclass(frozen=True)
class Editing:
    """A draft populated from an existing project."""

    target_id: str


FormState = Union[Closed, Creating, Editing]


# ============================================================================
# Draft
# ============================================================================


_LIST_FIELDS = ("technologies", "images")
_TEXT_FIELDS = ("title", "description", "repository_url", "demo_url", "thumbnail_url")


@dataclass
class FormDraft:
    """Raw form values. Empty text means "not provided"."""

    title: str = ""
    description: str = ""
    technologies: list[str] = field(default_factory=list)
    repository_url: str = ""
    demo_url: str = ""
    thumbnail_url: str = ""
    images: list[str] = field(default_factory=list)
    featured: bool = False

    @classmethod
    def from_project(cls, project: PortfolioProject) -> "FormDraft":
        return cls(
            title=project.title,
            description=project.description,
            technologies=list(project.technologies),
            repository_url=project.repository_url or "",
            demo_url=project.demo_url or "",
            thumbnail_url=project.thumbnail_url or "",
            images=list(project.images),
            featured=project.featured,
        )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def missing_required_fields(self) -> list[str]:
        return missing_required_fields(self.title, self.description, self.technologies)

    def to_create_draft(self, owner_id: str) -> ProjectDraft:
        return ProjectDraft(owner_id=owner_id, **self._entity_values())

    def to_patch(self, original: "FormDraft | None" = None) -> ProjectPatch:
        """Build an update patch.

        With ``original`` given, only fields whose raw value differs from it
        are included, so untouched fields keep their stored value verbatim.
        """
        values = self._entity_values()
        if original is not None:
            values = {
                name: value
                for name, value in values.items()
                if getattr(self, name) != getattr(original, name)
            }
        return ProjectPatch(**values)

    def _entity_values(self) -> dict[str, Any]:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "technologies": list(self.technologies),
            "repository_url": _optional_text(self.repository_url),
            "demo_url": _optional_text(self.demo_url),
            "thumbnail_url": _optional_text(self.thumbnail_url),
            "images": list(self.images),
            "featured": self.featured,
        }


def _optional_text(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


# ============================================================================
# Controller
# ============================================================================


class FormController:
    """Dual-mode add/edit form bound to a ``ProjectStore``.

    Attributes:
        store: Store receiving create/update submissions
        owner_id: Owner assigned to newly created projects
        state: Current ``Closed``/``Creating``/``Editing`` state
        draft: Current draft values
    """

    def __init__(self, store: ProjectStore, owner_id: str | None = None) -> None:
        self.store = store
        self.owner_id = owner_id
        self.state: FormState = Closed()
        self.draft = FormDraft()
        self._original: FormDraft | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return not isinstance(self.state, Closed)

    @property
    def is_editing(self) -> bool:
        return isinstance(self.state, Editing)

    @property
    def title_text(self) -> str:
        return "Edit Project" if self.is_editing else "Add New Project"

    @property
    def submit_label(self) -> str:
        return "Update Project" if self.is_editing else "Add Project"

    @property
    def technologies_text(self) -> str:
        return format_comma_list(self.draft.technologies)

    @property
    def images_text(self) -> str:
        return format_comma_list(self.draft.images)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open_create(self) -> None:
        """Start a blank draft. Ignored while already creating."""
        if isinstance(self.state, Creating):
            return
        self.state = Creating()
        self.draft = FormDraft()
        self._original = None

    def open_edit(self, project: PortfolioProject) -> None:
        """Start editing ``project`` with a draft copied from its values."""
        self.state = Editing(target_id=project.id)
        self.draft = FormDraft.from_project(project)
        self._original = FormDraft.from_project(project)

    def change_field(self, name: str, value: Any) -> None:
        """Set one draft field. Comma-list fields accept text or a sequence."""
        if not self.is_open:
            raise FormStateError(f"Cannot change '{name}' while the form is closed")
        if name not in FormDraft.field_names():
            raise ValueError(f"Unknown form field: {name}")

        if name in _LIST_FIELDS:
            if value is None or isinstance(value, str):
                value = parse_comma_list(value)
            elif isinstance(value, Sequence):
                value = clean_items(value)
            else:
                raise TypeError(f"'{name}' expects text or a sequence, got {type(value).__name__}")
        elif name in _TEXT_FIELDS:
            value = "" if value is None else str(value)
        else:
            value = parse_flag(value)

        setattr(self.draft, name, value)

    def submit(self) -> PortfolioProject:
        """Commit the draft to the store and close the form.

        On any failure the state and draft are left untouched.

        Raises:
            FormStateError: the form is closed
            ValidationError: a required field is empty
            ProfileUnavailableError: creating without an owner
            NotFoundError: the edited project no longer exists
        """
        state = self.state
        if isinstance(state, Closed):
            raise FormStateError("Cannot submit while the form is closed")

        missing = self.draft.missing_required_fields()
        if missing:
            raise ValidationError(missing)

        if isinstance(state, Editing):
            project = self.store.update(state.target_id, self.draft.to_patch(self._original))
        else:
            if not self.owner_id:
                raise ProfileUnavailableError("Cannot create a project without an owner profile")
            project = self.store.create(self.draft.to_create_draft(self.owner_id))

        logger.debug(f"Form submitted from {type(state).__name__} for project {project.id}")
        self._reset()
        return project

    def cancel(self) -> None:
        """Discard the draft and close the form."""
        self._reset()

    def _reset(self) -> None:
        self.state = Closed()
        self.draft = FormDraft()
        self._original = None
