"""
Configuration settings for the seal codec.

Settings are read once from an optional YAML file named by the
``SEAL_CODEC_CONFIG`` environment variable, then overridden by individual
``SEAL_CODEC_<FIELD>`` environment variables. ``configure()`` replaces the
active settings at runtime (tests use it to pin the year policies).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from seal_codec.types import SealCodecError

CONFIG_ENV_VAR = "SEAL_CODEC_CONFIG"
ENV_PREFIX = "SEAL_CODEC_"


class ConfigurationError(SealCodecError):
    """Raised when the configuration cannot be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")


class CodecSettings(BaseSettings):
    """Tunable policies of the codec, read from ``SEAL_CODEC_<FIELD>`` variables."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False, extra="ignore")

    log_level: str = Field(default="INFO", description="Root log level or OFF")
    log_format: str = Field(default="text", description="'text', 'json' or a logging format string")
    mrz_cutoff_year: int = Field(
        default=60, ge=0, le=99,
        description="Two-digit MRZ years above this value are 19xx, others 20xx",
    )
    birth_year_pivot: int = Field(
        default=32, ge=0, le=99,
        description="Seal birth years at or above this value are 19xx, others 20xx",
    )
    warn_unknown_codes: bool = Field(
        default=True, description="Log a warning for unknown nationality/authority codes"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment variables override values read from the YAML file.
        return env_settings, init_settings, file_secret_settings


def load_settings(path: str | Path | None = None) -> CodecSettings:
    """Build settings from a YAML file and environment overrides.

    Args:
        path: YAML file to read; defaults to ``$SEAL_CODEC_CONFIG`` when set

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    values: dict[str, Any] = {}
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if path:
        config_path = Path(path)
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise ConfigurationError(msg)
        try:
            with config_path.open(encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in configuration file {config_path}: {e}"
            raise ConfigurationError(msg) from e
        if not isinstance(loaded, dict):
            msg = f"Configuration file {config_path} must contain a mapping"
            raise ConfigurationError(msg)
        values.update(loaded.get("seal_codec", loaded))

    try:
        return CodecSettings(**values)
    except PydanticValidationError as e:
        msg = f"Invalid seal codec configuration: {e}"
        raise ConfigurationError(msg) from e


_settings: CodecSettings | None = None


def get_settings() -> CodecSettings:
    """Return the active settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(settings: CodecSettings | None = None, **overrides: Any) -> CodecSettings:
    """Replace the active settings.

    Passing no settings object starts from the current ones and applies
    ``overrides`` on top.
    """
    global _settings
    base = settings or get_settings()
    _settings = base.model_copy(update=overrides) if overrides else base
    return _settings


def reset_settings() -> None:
    """Forget the active settings so the next access reloads them."""
    global _settings
    _settings = None
