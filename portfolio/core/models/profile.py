"""Owner profile as supplied by the surrounding application."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OwnerProfile(BaseModel):
    """The profile whose projects are managed.

    ``ready`` is False while the profile is still incomplete; the manager
    treats such a profile as absent.
    """

    id: str
    ready: bool = True

    model_config = ConfigDict(frozen=True)
