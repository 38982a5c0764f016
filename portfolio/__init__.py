"""Portfolio project manager package."""

from .domain.manager import ManagerStatus, PortfolioManager
from .domain.store import ProjectStore

__all__ = ["ManagerStatus", "PortfolioManager", "ProjectStore"]
