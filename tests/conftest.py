"""Shared fixtures."""

from pathlib import Path

import pytest

import depeche.config
import depeche.config.paths


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config module at a temporary directory with an empty cache."""
    directory = tmp_path / "depeche"
    monkeypatch.setattr(depeche.config.paths, "CONFIG_DIR", directory)
    monkeypatch.setattr(depeche.config, "CONFIG_FILE", directory / "config.toml")
    monkeypatch.setattr(depeche.config, "_cached_config", None)
    monkeypatch.delenv(depeche.config.PASSWORD_ENV, raising=False)
    return directory
