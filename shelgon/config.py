"""Configuration parsing for shelgon config.yaml"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from shelgon.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.shelgon/config.yaml")


class ThemeConfig(BaseModel):
    """Rich style strings used when rendering the session"""

    prompt: str = "blue"
    command: str = "bold"
    cursor: str = "black on white"
    cursor_blank: str = "on white"
    stderr: str = "red"
    completion: str = "on rgb(200,200,200)"

    @field_validator("*")
    @classmethod
    def validate_style(cls, value: str) -> str:
        try:
            Style.parse(value)
        except StyleSyntaxError as e:
            raise ValueError(str(e)) from e
        return value


class TerminalConfig(BaseModel):
    """Terminal adapter settings"""

    # seconds to wait before treating a lone ESC byte as the Escape key
    escape_timeout: float = Field(default=0.05, gt=0)


class ShelgonConfig(BaseModel):
    """Full config.yaml configuration"""

    theme: ThemeConfig = ThemeConfig()
    terminal: TerminalConfig = TerminalConfig()
    log_file: Path | None = None

    @field_validator("log_file")
    @classmethod
    def expand_log_file(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    @classmethod
    def load(cls, path: Path) -> "ShelgonConfig":
        """Load config from yaml file, falling back to defaults if missing"""
        path = path.expanduser()
        if not path.exists():
            log.debug(f"No config at {path}, using defaults")
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(path, f"malformed yaml ({e})") from e

        if not isinstance(data, dict):
            raise ConfigError(path, "top level must be a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(path, str(e)) from e


def resolve_config_path() -> Path:
    """Config path from $SHELGON_CONFIG, else ~/.shelgon/config.yaml"""
    env_path = os.environ.get("SHELGON_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()
