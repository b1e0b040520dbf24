"""Configuration management for vizier-tap.

Handles TOML config files, environment variables, named endpoint
profiles, and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--url, --timeout)
2. Environment variables (VIZIER_TAP_URL, VIZIER_TAP_TIMEOUT)
3. Named profile (--profile or VIZIER_TAP_PROFILE env var)
4. Config file defaults
5. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from enum import StrEnum
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from vizier_tap.core.exceptions import ConfigError

DEFAULT_VIZIER_TAP_URL = "http://tapvizier.u-strasbg.fr/TAPVizieR/tap/sync"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "vizier-tap" / "config.toml"
DEFAULT_TIMEOUT = 60.0


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


DEFAULT_FORMAT = OutputFormat.TABLE

_ENV_VARS: dict[str, str] = {
    "VIZIER_TAP_URL": "tap_url",
    "VIZIER_TAP_TIMEOUT": "timeout",
}

_PROFILE_TO_FIELD: dict[str, str] = {
    "url": "tap_url",
    "timeout": "timeout",
}


def validate_tap_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"Invalid TAP URL: '{url}'. Expected an http:// or https:// URL"
        raise ValueError(msg)
    return url


def _validate_timeout(v: float) -> float:
    if v <= 0:
        msg = f"Invalid timeout: {v}. Must be greater than 0"
        raise ValueError(msg)
    return v


class TapProfile(BaseModel):
    url: str = DEFAULT_VIZIER_TAP_URL
    timeout: float = DEFAULT_TIMEOUT
    description: str | None = None

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return validate_tap_url(v)

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        return _validate_timeout(v)


class AppConfig(BaseModel):
    default_timeout: float = DEFAULT_TIMEOUT
    default_format: OutputFormat = DEFAULT_FORMAT
    default_profile: str | None = None
    profiles: dict[str, TapProfile] = {}

    @field_validator("default_timeout")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        return _validate_timeout(v)


class ResolvedConfig(BaseModel):
    """Effective settings for one client; never mutated after resolution."""

    model_config = ConfigDict(frozen=True)

    tap_url: str = DEFAULT_VIZIER_TAP_URL
    timeout: float = DEFAULT_TIMEOUT
    default_format: OutputFormat = DEFAULT_FORMAT
    active_profile: str | None = None
    sources: dict[str, str] = {}

    @field_validator("tap_url")
    @classmethod
    def check_url(cls, v: str) -> str:
        return validate_tap_url(v)

    @field_validator("timeout")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        return _validate_timeout(v)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_config(
    config: AppConfig | None = None,
    profile_name: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > env > profile > config defaults > built-in defaults.
    """
    if config is None:
        config = AppConfig()

    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {
        "tap_url": DEFAULT_VIZIER_TAP_URL,
        "timeout": DEFAULT_TIMEOUT,
        "default_format": DEFAULT_FORMAT,
    }
    for key in resolved:
        sources[key] = "default"

    # Layer 1: Config file global defaults
    if "default_timeout" in config.model_fields_set:
        resolved["timeout"] = config.default_timeout
        sources["timeout"] = "config"
    if "default_format" in config.model_fields_set:
        resolved["default_format"] = config.default_format
        sources["default_format"] = "config"

    # Layer 2: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("VIZIER_TAP_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            field_name = _PROFILE_TO_FIELD.get(key)
            if field_name is not None:
                resolved[field_name] = getattr(profile, key)
                sources[field_name] = f"profile: {effective_profile}"

    # Layer 3: Environment variables
    for env_var, field_name in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if field_name == "timeout":
            try:
                resolved[field_name] = float(value)
            except ValueError:
                msg = f"Invalid {env_var} value: '{value}'. Must be a number"
                raise ConfigError(msg) from None
        else:
            resolved[field_name] = value
        sources[field_name] = f"env: {env_var}"

    # Layer 4: CLI flags (highest priority)
    cli_to_field = {
        "url": "tap_url",
        "timeout": "timeout",
        "format": "default_format",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"cli: --{cli_name}"

    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    try:
        return ResolvedConfig(**resolved)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
