"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from mdblocks.errors import ConfigError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDBLOCKS_"


class Settings(BaseModel):
    app_name:      str = "mdblocks"
    db_url:        str = "sqlite:///mdblocks.db"
    output_format: str = Field(default="json", pattern="^(json|yaml)$", description="Token dump format: json or yaml")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    readonly:      bool = Field(default=False, description="Render code islands non-editable")
    id_prefix:     str = Field(default="cb-", min_length=1, description="Prefix for generated code block ids")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOCKS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
