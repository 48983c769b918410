"""
audiodelta.config - YAML config loading, override merging, validation.

Configuration is optional: defaults cover the usual run, and a YAML file is
only read when one is named explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from audiodelta.exceptions import ConfigError
from audiodelta.models import INITIAL_CAPACITY


class DeltaConfig(BaseModel):
    """Resolved settings for one delta measurement."""

    sample_rate: int | None = Field(default=None, gt=0)
    first_channel: int = Field(default=0, ge=0)
    second_channel: int = Field(default=1, ge=0)
    initial_capacity: int = Field(default=INITIAL_CAPACITY, gt=0)


def load_config(path: Path) -> DeltaConfig:
    """Load and validate configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file isn't a mapping or a value is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ConfigError("config must be a mapping", path=str(path))

    try:
        return DeltaConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(str(e), path=str(path)) from e


def merge_overrides(config: DeltaConfig, **overrides: Any) -> DeltaConfig:
    """Apply command-line overrides. None means "not given" and is skipped."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    try:
        return DeltaConfig(**{**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def write_config(config: DeltaConfig, path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
