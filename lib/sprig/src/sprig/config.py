"""Configuration for the sprig engine.

Config files are YAML, either flat or nested under a `sprig:` key:

    sprig:
      max_depth: 16
      max_output: 1000000
      cache_size: 256
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sprig.exceptions import ConfigError

ENV_PREFIX = "SPRIG_"


class EngineConfig(BaseModel):
    """Limits and caching behaviour for compiling and rendering templates."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int | None = Field(
        default=None, ge=1, description="Maximum directive nesting depth"
    )
    max_output: int | None = Field(
        default=None, ge=0, description="Maximum rendered characters per render call"
    )
    cache_size: int = Field(
        default=128, ge=0, description="Compiled templates kept by an Engine (0 disables)"
    )
    encoding: str = Field(default="utf-8", description="Encoding used to read template files")


def load_config(path: Path | str) -> EngineConfig:
    """Load an EngineConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is unreadable, not valid YAML or not a valid config.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a mapping")
    if "sprig" in data:
        data = data["sprig"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"'sprig' section in {path} must be a mapping")

    return _validate(data, source=str(path))


def config_from_env(
    base: EngineConfig | None = None, environ: Mapping[str, str] | None = None
) -> EngineConfig:
    """Apply SPRIG_MAX_DEPTH, SPRIG_MAX_OUTPUT and SPRIG_CACHE_SIZE overrides."""
    base = base or EngineConfig()
    environ = os.environ if environ is None else environ

    overrides: dict[str, Any] = {}
    for name in ("max_depth", "max_output", "cache_size"):
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            overrides[name] = raw.strip()

    if not overrides:
        return base

    data = base.model_dump()
    data.update(overrides)
    return _validate(data, source="environment")


def _validate(data: dict[str, Any], source: str) -> EngineConfig:
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid sprig config from {source}: {e}") from e
