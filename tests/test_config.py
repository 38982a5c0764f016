"""Configuration tests."""

import json

import pytest

from portfolio.app.config import (
    LoaderConfig,
    PortfolioConfig,
    ViewConfig,
    get_config,
    reload_config,
    set_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("PORTFOLIO_DATA_DIR", "PORTFOLIO_MOCK_DELAY", "PORTFOLIO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # Keep load_dotenv away from any developer .env file
    monkeypatch.chdir(tmp_path)


def test_defaults():
    config = PortfolioConfig()

    assert config.loader.mock_delay_seconds == 1.0
    assert config.views.technology_preview_limit == 3
    assert config.log_level == "INFO"


def test_missing_file_gives_defaults(tmp_path):
    config = PortfolioConfig.load(tmp_path / "absent.json")

    assert config.to_dict()["loader"] == {"mock_delay_seconds": 1.0}


def test_save_and_load_roundtrip(tmp_path):
    config = PortfolioConfig(
        data_dir=tmp_path,
        loader=LoaderConfig(mock_delay_seconds=0.25),
        views=ViewConfig(technology_preview_limit=5),
        log_level="DEBUG",
    )

    path = config.save()
    loaded = PortfolioConfig.load(path)

    assert path == tmp_path / "portfolio_config.json"
    assert loaded.to_dict() == config.to_dict()


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"loader": {"mock_delay_seconds": 0, "retries": 3}}))

    config = PortfolioConfig.load(path)

    assert config.loader.mock_delay_seconds == 0


def test_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"loader": {"mock_delay_seconds": 2}, "log_level": "INFO"}))
    monkeypatch.setenv("PORTFOLIO_MOCK_DELAY", "0.5")
    monkeypatch.setenv("PORTFOLIO_LOG_LEVEL", "warning")
    monkeypatch.setenv("PORTFOLIO_DATA_DIR", str(tmp_path / "data"))

    config = PortfolioConfig.load(path)

    assert config.loader.mock_delay_seconds == 0.5
    assert config.log_level == "WARNING"
    assert config.data_dir == tmp_path / "data"
    assert config.log_dir == tmp_path / "data" / "logs"


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        PortfolioConfig(log_level="LOUD")
    with pytest.raises(ValueError):
        PortfolioConfig(views=ViewConfig(technology_preview_limit=-1))


def test_global_config(tmp_path):
    custom = PortfolioConfig(data_dir=tmp_path)
    set_config(custom)
    assert get_config() is custom

    reloaded = reload_config(tmp_path / "absent.json")
    assert get_config() is reloaded
    assert reloaded is not custom
