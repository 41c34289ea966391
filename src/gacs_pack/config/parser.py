"""Settings parser with Pydantic validation."""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "GACS_PACK_"


class TokenizerSettings(BaseModel):
    """Reference tokenizer selection."""

    kind: Literal["tiktoken", "chars"] = "tiktoken"
    model: str = "gpt-4"
    chars_per_token: float = 4.0


class StoreSettings(BaseModel):
    """Reference snapshot store selection."""

    kind: Literal["memory", "sqlite"] = "memory"
    db_path: str = "gacs_pack.db"
    tenant_id: Optional[str] = None


class PackSettings(BaseModel):
    """Top-level gacs-pack settings."""

    policy_version: Optional[str] = None
    log_level: str = "INFO"
    tokenizer: TokenizerSettings = Field(default_factory=TokenizerSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)


class ConfigSource:
    """Configuration source tracking."""

    def __init__(self, name: str, data: Dict[str, Any]):
        self.name = name
        self.data = data


def _parse_env_vars() -> Dict[str, Any]:
    """Parse GACS_PACK_* environment variables."""
    env_config = {}

    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            config_key = key[len(ENV_PREFIX):].lower()

            # Nested keys use double underscores: GACS_PACK_STORE__KIND
            if "__" in config_key:
                parts = config_key.split("__")
                if len(parts) == 2:
                    section, field = parts
                    env_config.setdefault(section, {})[field] = _parse_env_value(value)
            else:
                env_config[config_key] = _parse_env_value(value)

    return env_config


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Numeric strings are coerced by pydantic only where the field is numeric
    return value


def _merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge multiple config dictionaries with later ones taking precedence."""
    result = {}

    for config in configs:
        _deep_merge(result, config)

    return result


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Deep merge source into target."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def load_settings(
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Tuple[PackSettings, List[ConfigSource]]:
    """Load settings with inheritance: defaults < YAML file < env vars < overrides."""
    sources = []

    # 1. Built-in defaults
    defaults = PackSettings().model_dump()
    sources.append(ConfigSource("defaults", defaults))

    # 2. Settings file
    file_config = {}
    if path is not None and Path(path).exists():
        with open(path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
        sources.append(ConfigSource(str(path), file_config))

    # 3. Environment variables
    env_config = _parse_env_vars()
    if env_config:
        sources.append(ConfigSource("environment", env_config))

    # 4. Explicit overrides
    override_config = overrides or {}
    if override_config:
        sources.append(ConfigSource("overrides", override_config))

    merged = _merge_configs(defaults, file_config, env_config, override_config)

    return PackSettings(**merged), sources

