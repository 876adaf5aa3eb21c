"""
Configuration Loading Utilities.

Runtime settings come from the environment (and ``.env`` files, matching the
template's ``.env.example``).  YAML files such as the layout manifest are
read with :func:`load_config`.
"""

from __future__ import annotations

import copy
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sample_backend.core.exceptions import ConfigurationError
from sample_backend.core.logging_setup import parse_level

DEFAULT_SECRET_KEY = "change-me"

# Vite and create-react-app dev servers
DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]


class Settings(BaseSettings):
    """Centralised settings for the backend service."""

    app_name: str = Field("Sample Backend", alias="APP_NAME")
    app_env: Literal["development", "testing", "production"] = Field(
        "development", alias="APP_ENV"
    )
    debug: bool = Field(False, alias="DEBUG")
    secret_key: str = Field(DEFAULT_SECRET_KEY, alias="SECRET_KEY")

    database_url: str = Field("sqlite:///./sample_backend.db", alias="DATABASE_URL")

    api_prefix: str = Field("/api", alias="API_PREFIX")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS), alias="CORS_ORIGINS"
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(None, alias="LOG_FILE")

    default_page_size: int = Field(20, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(100, ge=1, alias="MAX_PAGE_SIZE")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("api_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        parse_level(value)
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_consistency(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ConfigurationError(
                "DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE",
                {"default_page_size": self.default_page_size, "max_page_size": self.max_page_size},
            )
        if self.app_env == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigurationError("SECRET_KEY must be set in production")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()


def load_config(
    config_path: str | Path,
    defaults: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file
        defaults: Values for top-level sections the file leaves out

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
        ConfigurationError: If the document is not a mapping
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {config_path}",
            {"type": type(config).__name__},
        )

    for section, value in (defaults or {}).items():
        if config.get(section) is None:
            config[section] = copy.deepcopy(value)

    return config


def save_config(config: dict[str, Any], config_path: str | Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
