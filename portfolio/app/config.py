"""
Portfolio Configuration.

Central configuration for the portfolio manager: JSON file values first,
then environment overrides (``PORTFOLIO_*``, optionally from a ``.env``).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from dotenv import find_dotenv, load_dotenv

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

CONFIG_FILENAME = "portfolio_config.json"


# ============================================================================
# Default Paths
# ============================================================================


def get_default_data_dir() -> Path:
    """Get the default data directory."""
    if env_path := os.environ.get("PORTFOLIO_DATA_DIR"):
        return Path(env_path)
    return Path.home() / ".portfolio"


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class LoaderConfig:
    """Configuration for the initial project load."""

    mock_delay_seconds: float = 1.0  # Simulated backend latency

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoaderConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {"mock_delay_seconds": self.mock_delay_seconds}


@dataclass
class ViewConfig:
    """Configuration for the project views."""

    technology_preview_limit: int = 3  # Technologies shown per card

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {"technology_preview_limit": self.technology_preview_limit}


@dataclass
class PortfolioConfig:
    """Main configuration.

    Aggregates the sub-configurations and provides load/save functionality.
    """

    data_dir: Path = field(default_factory=get_default_data_dir)
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    views: ViewConfig = field(default_factory=ViewConfig)
    log_level: LogLevel = "INFO"

    def __post_init__(self):
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")
        if self.loader.mock_delay_seconds < 0:
            raise ValueError("mock_delay_seconds must not be negative")
        if self.views.technology_preview_limit < 0:
            raise ValueError("technology_preview_limit must not be negative")

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "PortfolioConfig":
        """Load configuration from a JSON file and apply environment overrides.

        Args:
            config_path: Path to config file. If None, uses the default location.

        Returns:
            PortfolioConfig instance
        """
        load_dotenv(find_dotenv(usecwd=True))

        if config_path is None:
            config_path = get_default_data_dir() / CONFIG_FILENAME
        config_path = Path(config_path)

        data: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

        return cls.from_dict(apply_env_overrides(data))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PortfolioConfig":
        """Create config from dictionary."""
        return cls(
            data_dir=Path(data.get("data_dir", get_default_data_dir())),
            loader=LoaderConfig.from_dict(data.get("loader", {})),
            views=ViewConfig.from_dict(data.get("views", {})),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "data_dir": str(self.data_dir),
            "loader": self.loader.to_dict(),
            "views": self.views.to_dict(),
            "log_level": self.log_level,
        }

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration to a JSON file.

        Returns:
            Path to saved file
        """
        if config_path is None:
            config_path = self.data_dir / CONFIG_FILENAME

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


def apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with ``PORTFOLIO_*`` environment values applied."""
    result = dict(data)
    if env_dir := os.environ.get("PORTFOLIO_DATA_DIR"):
        result["data_dir"] = env_dir
    if env_delay := os.environ.get("PORTFOLIO_MOCK_DELAY"):
        result["loader"] = {**result.get("loader", {}), "mock_delay_seconds": float(env_delay)}
    if env_level := os.environ.get("PORTFOLIO_LOG_LEVEL"):
        result["log_level"] = env_level.upper()
    return result


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: PortfolioConfig | None = None


def get_config() -> PortfolioConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = PortfolioConfig.load()
    return _global_config


def set_config(config: PortfolioConfig) -> None:
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> PortfolioConfig:
    """Reload configuration from disk."""
    global _global_config
    _global_config = PortfolioConfig.load(config_path)
    return _global_config
