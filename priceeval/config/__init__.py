"""Configuration helpers for priceeval."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    PriceEvalSettings,
    YamlSettingsSource,
    load_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "PriceEvalSettings",
    "YamlSettingsSource",
    "load_settings",
]
