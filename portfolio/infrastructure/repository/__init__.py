"""Project repository implementations."""

from portfolio.infrastructure.repository.base import ProjectRepository
from portfolio.infrastructure.repository.memory_repository import InMemoryProjectRepository
from portfolio.infrastructure.repository.mock_repository import (
    MockProjectRepository,
    sample_projects,
)

__all__ = [
    "InMemoryProjectRepository",
    "MockProjectRepository",
    "ProjectRepository",
    "sample_projects",
]
