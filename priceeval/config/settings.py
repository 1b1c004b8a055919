# SPDX-License-Identifier: MIT
"""Layered settings for priceeval.

Values are resolved from explicit keyword overrides, ``PRICEEVAL_*``
environment variables, a ``.env`` file and finally a YAML file, in that order.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError
from pydantic_settings.sources import PydanticBaseSettingsSource

from priceeval.utils.logging import LOG_LEVELS, configure_logging

DEFAULT_CONFIG_PATH = Path("configs/priceeval.yaml")


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Lowest-priority settings source that loads values from a YAML file.

    The file location is taken from ``config_file`` in the higher-priority
    sources, falling back to the field default.  An explicit ``None`` disables
    the file and a missing file contributes nothing.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        *higher_sources: PydanticBaseSettingsSource,
    ) -> None:
        super().__init__(settings_cls)
        self._higher_sources = higher_sources

    def __call__(self) -> dict[str, Any]:
        config_path = self._resolve_path()
        if config_path is None:
            return {}
        try:
            text = config_path.read_text(encoding="utf8")
        except FileNotFoundError:
            return {}
        try:
            payload = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(
                f"failed to parse YAML configuration at {config_path}: {exc}"
            ) from exc
        if not isinstance(payload, Mapping):
            raise SettingsError(f"configuration file {config_path} must define a mapping")
        return dict(payload)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def _resolve_path(self) -> Path | None:
        for source in self._higher_sources:
            data = source()
            if "config_file" in data:
                candidate = data["config_file"]
                return Path(candidate).expanduser() if candidate else None

        field = self.settings_cls.model_fields.get("config_file")
        default_value = getattr(field, "default", None) if field else None
        if default_value:
            return Path(default_value).expanduser()
        return None


class PriceEvalSettings(BaseSettings):
    """Runtime settings for the price accuracy metrics."""

    model_config = SettingsConfigDict(
        env_prefix="PRICEEVAL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf8",
        extra="ignore",
    )

    config_file: Path | None = Field(
        default=DEFAULT_CONFIG_PATH,
        description="YAML file providing default values.",
    )
    log_level: str = Field(default="INFO", description="Root logger level.")
    log_json: bool = Field(default=True, description="Emit JSON log records.")
    empty_input_policy: Literal["raise", "nan"] = Field(
        default="raise",
        description=(
            "How relative_error_ratio treats empty input: raise EmptyInputError "
            "or return NaN."
        ),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: Any) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_source = YamlSettingsSource(
            settings_cls, init_settings, env_settings, dotenv_settings
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_source,
            file_secret_settings,
        )

    def apply_logging(self, stream: Any = None) -> None:
        """Configure the root logger from these settings."""

        configure_logging(level=self.log_level, use_json=self.log_json, stream=stream)


def load_settings(path: str | Path | None = None, **overrides: Any) -> PriceEvalSettings:
    """Build :class:`PriceEvalSettings` from overrides, environment and YAML.

    ``path`` selects the YAML file; when omitted the ``PRICEEVAL_CONFIG_FILE``
    environment variable or :data:`DEFAULT_CONFIG_PATH` is used.
    """

    if path is not None:
        overrides.setdefault("config_file", Path(path))
    try:
        return PriceEvalSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"invalid priceeval settings: {exc}") from exc


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "PriceEvalSettings",
    "YamlSettingsSource",
    "load_settings",
]
