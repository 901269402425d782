"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from shortsim.config import Config, RetentionConfig
from shortsim.models import ScriptVariant
from shortsim.samples import SAMPLE_VARIANTS, load_samples


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch):
    """Keep a developer's SHORTSIM_CONFIG out of the tests."""
    monkeypatch.delenv("SHORTSIM_CONFIG", raising=False)


@pytest.fixture
def test_config() -> Config:
    """Provide a default configuration."""
    return Config()


@pytest.fixture
def flat_config() -> RetentionConfig:
    """Retention config with a flat 0.80 baseline and the default weights."""
    return RetentionConfig(baseline=(0.80,) * 10)


@pytest.fixture
def sample_variants() -> list[ScriptVariant]:
    return load_samples()


@pytest.fixture
def samples_file(tmp_path) -> Path:
    """Write the bundled samples to a JSON file."""
    path = tmp_path / "scripts.json"
    path.write_text(json.dumps(SAMPLE_VARIANTS))
    return path

