"""
Unit tests for settings loading.
"""

import pytest

from landscape.config import DEFAULT_GRAPH_FILE, DEFAULT_MAX_DEPTH, load_settings
from landscape.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("LANDSCAPE_GRAPH_FILE", "LANDSCAPE_MAX_DEPTH", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)


class TestLoadSettings:
    def test_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "config.yaml")

        assert settings.graph_file == DEFAULT_GRAPH_FILE
        assert settings.max_depth == DEFAULT_MAX_DEPTH
        assert settings.github_token is None

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("graph_file: landscape.json\nmax_depth: 5\nenrich_concurrency: 2\n")

        settings = load_settings(path)
        assert settings.graph_file == "landscape.json"
        assert settings.max_depth == 5
        assert settings.enrich_concurrency == 2

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: 5\n")
        monkeypatch.setenv("LANDSCAPE_MAX_DEPTH", "1")
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")

        settings = load_settings(path)
        assert settings.max_depth == 1
        assert settings.github_token == "ghp_test"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: [unclosed\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_settings(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_depth: -2\n")

        with pytest.raises(ConfigError):
            load_settings(path)
