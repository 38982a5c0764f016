"""
Core Models - portfolio project and owner profile.
"""

from portfolio.core.models.profile import OwnerProfile
from portfolio.core.models.project import (
    PortfolioProject,
    ProjectDraft,
    ProjectPatch,
    apply_patch,
)

__all__ = [
    "OwnerProfile",
    "PortfolioProject",
    "ProjectDraft",
    "ProjectPatch",
    "apply_patch",
]
