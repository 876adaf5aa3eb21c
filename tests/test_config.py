"""
Unit tests for settings and configuration loading utilities.
"""

from __future__ import annotations

import pydantic
import pytest
import yaml

from sample_backend.core.config import (
    DEFAULT_CORS_ORIGINS,
    Settings,
    get_settings,
    load_config,
    save_config,
)
from sample_backend.core.exceptions import ConfigurationError


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("APP_ENV", "CORS_ORIGINS", "API_PREFIX", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"):
            monkeypatch.delenv(key, raising=False)
        settings = Settings(_env_file=None)
        assert settings.app_env == "development"
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS
        assert settings.api_prefix == "/api"
        assert (settings.default_page_size, settings.max_page_size) == (20, 100)

    def test_cors_origins_from_comma_separated_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "https://app.example.com, http://localhost:5173 ,")
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["https://app.example.com", "http://localhost:5173"]

    def test_cors_origins_accepts_list(self) -> None:
        settings = Settings(_env_file=None, CORS_ORIGINS=["https://a.example"])
        assert settings.cors_origins == ["https://a.example"]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("/api", "/api"), ("api/", "/api"), ("/api/v1/", "/api/v1"), ("", "")],
    )
    def test_api_prefix_normalised(self, raw: str, expected: str) -> None:
        assert Settings(_env_file=None, API_PREFIX=raw).api_prefix == expected

    def test_production_requires_secret_key(self) -> None:
        with pytest.raises(ConfigurationError):
            Settings(_env_file=None, APP_ENV="production", SECRET_KEY="change-me")

    def test_production_with_secret_key(self) -> None:
        settings = Settings(_env_file=None, APP_ENV="production", SECRET_KEY="s3cret")
        assert settings.app_env == "production"

    def test_page_size_consistency(self) -> None:
        with pytest.raises(ConfigurationError):
            Settings(_env_file=None, DEFAULT_PAGE_SIZE=200, MAX_PAGE_SIZE=100)

    def test_log_level_normalised(self) -> None:
        assert Settings(_env_file=None, LOG_LEVEL=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="Unknown log level"):
            Settings(_env_file=None, LOG_LEVEL="chatty")

    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APP_NAME", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text('APP_NAME="From File"\nMAX_PAGE_SIZE=75\n', encoding="utf-8")
        settings = Settings(_env_file=env_file)
        assert settings.app_name == "From File"
        assert settings.max_page_size == 75

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"directories": ["a"], "files": []}), encoding="utf-8")
        loaded = load_config(path)
        assert loaded["directories"] == ["a"]

    def test_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.yaml")

    def test_missing_sections_get_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("directories:\n  - src\n", encoding="utf-8")
        defaults = {"directories": [], "files": []}
        loaded = load_config(path, defaults=defaults)

        assert loaded["directories"] == ["src"]
        assert loaded["files"] == []
        loaded["files"].append("x")
        assert defaults["files"] == []

    def test_empty_file_is_empty_mapping(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_yaml_raises(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_save_then_load(self, tmp_path) -> None:
        config = {"directories": [{"path": "sample-client"}], "files": []}
        path = tmp_path / "nested" / "out.yaml"
        save_config(config, path)
        assert load_config(path) == config
