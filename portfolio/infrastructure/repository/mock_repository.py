"""
Mock project repository.

Stands in for a backend call: waits for a configurable delay and returns two
sample projects for any owner.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from portfolio.core.models.project import PortfolioProject

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.0


def sample_projects(owner_id: str, now: datetime | None = None) -> list[PortfolioProject]:
    """The sample payload returned by ``MockProjectRepository``."""
    now = now or datetime.now(UTC)
    return [
        PortfolioProject(
            id="1",
            owner_id=owner_id,
            title="Personal Portfolio Website",
            description=(
                "A responsive portfolio website built with modern web technologies "
                "to showcase my projects and skills."
            ),
            technologies=["React", "Next.js", "Tailwind CSS", "TypeScript"],
            repository_url="https://github.com/username/portfolio",
            demo_url="https://portfolio.username.dev",
            thumbnail_url="https://via.placeholder.com/500x300",
            images=[
                "https://via.placeholder.com/1200x800",
                "https://via.placeholder.com/1200x800",
            ],
            completed_at=now - timedelta(days=30),
            featured=True,
        ),
        PortfolioProject(
            id="2",
            owner_id=owner_id,
            title="E-commerce Dashboard",
            description=(
                "An admin dashboard for e-commerce platforms with sales analytics, "
                "inventory management, and order processing."
            ),
            technologies=["React", "Redux", "Material UI", "Node.js", "Express", "MongoDB"],
            repository_url="https://github.com/username/ecommerce-dashboard",
            demo_url="https://ecommerce-dash.username.dev",
            thumbnail_url="https://via.placeholder.com/500x300",
            images=[
                "https://via.placeholder.com/1200x800",
                "https://via.placeholder.com/1200x800",
            ],
            completed_at=now - timedelta(days=60),
            featured=False,
        ),
    ]


class MockProjectRepository:
    """Returns ``sample_projects`` after ``delay_seconds``."""

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.delay_seconds = delay_seconds
        self._clock = clock or (lambda: datetime.now(UTC))

    async def fetch_projects(self, owner_id: str) -> list[PortfolioProject]:
        logger.debug(f"Mock fetch for owner {owner_id} ({self.delay_seconds}s delay)")
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return sample_projects(owner_id, self._clock())
