"""Configuration module."""

from .parser import (
    ConfigSource,
    PackSettings,
    StoreSettings,
    TokenizerSettings,
    load_settings,
)
from .wiring import DEFAULT_POLICY_VERSION, EngineConfig, build_store, build_tokenizer

__all__ = [
    "ConfigSource",
    "PackSettings",
    "StoreSettings",
    "TokenizerSettings",
    "load_settings",
    "DEFAULT_POLICY_VERSION",
    "EngineConfig",
    "build_store",
    "build_tokenizer",
]
