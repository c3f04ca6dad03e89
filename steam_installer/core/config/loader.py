"""
Configuration loader — defaults, optional YAML file, env overrides.

The result is a frozen ``InstallerConfig``. Nothing reads configuration
from module globals: the CLI loads it once and hands the pieces to the
components that need them (the retry policy goes to the RetryExecutor
constructor, paths go to the detector and executor).

Precedence (later wins):
    built-in defaults  <  YAML file  <  STEAM_INSTALLER_* env vars
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STEAM_INSTALLER_CONFIG"
MAX_RETRIES_ENV_VAR = "STEAM_INSTALLER_MAX_RETRIES"
RETRY_DELAY_ENV_VAR = "STEAM_INSTALLER_RETRY_DELAY"

STEAM_DEB_URL = "https://repo.steampowered.com/steam/archive/stable/steam_latest.deb"


class ConfigError(Exception):
    """Raised when installer configuration is invalid or unreadable."""


class RetryPolicy(BaseModel):
    """Bounded retry: ``max_attempts`` total runs, fixed delay between them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_attempts: int = Field(default=3, ge=1)
    delay_seconds: float = Field(default=5.0, ge=0)


class InstallerConfig(BaseModel):
    """Process-wide installer settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    deb_url: str = STEAM_DEB_URL
    deb_path: str = "/tmp/steam_latest.deb"

    os_release_path: str = "/etc/os-release"
    redhat_release_path: str = "/etc/redhat-release"
    pacman_conf_path: str = "/etc/pacman.conf"

    executable: str = "steam"
    process_names: tuple[str, ...] = ("steam", "steamwebhelper")


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    retry: dict[str, Any] = {}
    if env.get(MAX_RETRIES_ENV_VAR):
        retry["max_attempts"] = env[MAX_RETRIES_ENV_VAR]
    if env.get(RETRY_DELAY_ENV_VAR):
        retry["delay_seconds"] = env[RETRY_DELAY_ENV_VAR]
    return {"retry": retry} if retry else {}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> InstallerConfig:
    """Build the installer configuration.

    Args:
        path: Explicit YAML file. If None, ``STEAM_INSTALLER_CONFIG`` is
            consulted; with neither, defaults are used.
        env: Environment mapping (default: ``os.environ``).

    Raises:
        ConfigError: If the file is unreadable or any value is invalid.
    """
    env = os.environ if env is None else env

    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR])

    data: dict[str, Any] = _read_yaml(path) if path is not None else {}

    overrides = _env_overrides(env)
    if overrides:
        current = data.get("retry") or {}
        if not isinstance(current, dict):
            raise ConfigError(f"'retry' must be a mapping, got {type(current).__name__}")
        retry = dict(current)
        retry.update(overrides["retry"])
        data = {**data, "retry": retry}

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger.info(
        "Retry policy: %d attempts, %.1fs delay",
        config.retry.max_attempts, config.retry.delay_seconds,
    )
    return config
