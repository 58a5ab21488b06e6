from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_LIST_URL = "https://picsum.photos/v2/list"


class SourceSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    list_url: str = DEFAULT_LIST_URL
    timeout_seconds: float = Field(default=15, ge=1, le=120)
    user_agent: str = "photobrowser/0.1"

    @field_validator("list_url")
    @classmethod
    def validate_list_url(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("source.list_url must not be empty")
        parsed = urlparse(text)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("source.list_url must be an absolute http(s) URL")
        return text

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("source.user_agent must not be empty")
        return text


class ViewportSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    width: int = Field(default=1024, ge=64, le=8192)
    height: int = Field(default=768, ge=64, le=8192)


class UiSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = "Photo Browser"
    poll_seconds: int = Field(default=2, ge=1, le=60)
    show_failures: bool = False
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)


class PhotoBrowserYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: SourceSettings = Field(default_factory=SourceSettings)
    ui: UiSettings = Field(default_factory=UiSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    photobrowser_env: Literal["dev", "test", "prod"] = "dev"
    photobrowser_config_path: Path = Path("config/photobrowser.yaml")
    photobrowser_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("photobrowser_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: PhotoBrowserYamlSettings
    project_root: Path
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def load_yaml_settings(path: Path) -> PhotoBrowserYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Photo browser config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Photo browser config must be a YAML mapping/object at the top level")
    return PhotoBrowserYamlSettings.model_validate(raw_config)


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    env = EnvSettings()
    config_path = _resolve_project_path(env.photobrowser_config_path)
    yaml_settings = load_yaml_settings(config_path)
    return AppSettings(
        env=env,
        yaml=yaml_settings,
        project_root=PROJECT_ROOT,
        config_path=config_path,
    )
