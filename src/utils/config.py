"""Configuration management using Pydantic Settings with YAML support."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Icons offered by the playlist creation dialog
PLAYLIST_ICON_OPTIONS: dict[str, str] = {
    "ri-music-fill": "Music",
    "ri-mic-fill": "Microphone",
    "ri-album-fill": "Album",
    "ri-file-music-fill": "Music File",
    "ri-sound-module-fill": "Sound Module",
    "ri-vidicon-fill": "Video",
}

# Icons offered by the category creation dialog
CATEGORY_ICON_OPTIONS: dict[str, str] = {
    "ri-mic-fill": "Microphone",
    "ri-file-music-fill": "Music File",
    "ri-sound-module-fill": "Sound Module",
    "ri-vidicon-fill": "Video",
    "ri-folder-music-fill": "Music Folder",
    "ri-music-fill": "Music",
}

# Display labels for any known icon
ICON_LABELS: dict[str, str] = {**PLAYLIST_ICON_OPTIONS, **CATEGORY_ICON_OPTIONS}

COLOR_OPTIONS: dict[str, str] = {
    "#1DB954": "Green",
    "#2D46B9": "Blue",
    "#F230AA": "Pink",
    "#FFC107": "Yellow",
    "#FF5722": "Orange",
    "#9C27B0": "Purple",
}

APPEND_POSITION = 9999


class ApiConfig(BaseModel):
    """Backend API connection settings."""

    base_url: str = "http://localhost:5000"
    timeout: float = 30.0
    session_cookie: str = "connect.sid"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class PlaylistDefaults(BaseModel):
    """Defaults for newly created playlists."""

    default_color: str = "#1DB954"
    default_icon: str = "ri-music-fill"


class UploadConfig(BaseModel):
    """Upload behaviour."""

    append_position: int = APPEND_POSITION  # "add to end" of a playlist
    default_category_color: str = "#1DB954"
    default_category_icon: str = "ri-mic-fill"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    json_format: bool = False

    @property
    def file_path(self) -> Path | None:
        return Path(self.file).expanduser() if self.file else None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_",
        env_nested_delimiter="__",
    )

    api: ApiConfig = Field(default_factory=ApiConfig)
    playlists: PlaylistDefaults = Field(default_factory=PlaylistDefaults)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path | str = "config.yaml") -> Settings:
    """Load configuration from YAML file with environment variable overrides."""
    path = Path(config_path)

    if path.exists():
        with open(path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    yaml_config = _expand_env_vars(yaml_config)

    return Settings(**yaml_config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} patterns in config values."""
    import os
    import re

    if isinstance(obj, str):
        pattern = re.compile(r"\$\{([^}]+)\}")
        for var in pattern.findall(obj):
            obj = obj.replace(f"${{{var}}}", os.environ.get(var, ""))
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def save_config(settings: Settings, config_path: Path | str = "config.yaml") -> None:
    """Save configuration to YAML file."""
    path = Path(config_path)
    config_dict = settings.model_dump(mode="json")

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
