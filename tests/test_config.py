"""
Tests for configuration loading — defaults, YAML file, environment.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from steam_installer.core.config.loader import (
    STEAM_DEB_URL,
    ConfigError,
    InstallerConfig,
    RetryPolicy,
    load_config,
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "installer.yml"
    path.write_text(text)
    return path


# ── Defaults ────────────────────────────────────────────────────────


class TestDefaults:
    def test_no_file_no_env(self):
        config = load_config(env={})
        assert config.retry.max_attempts == 3
        assert config.retry.delay_seconds == 5.0
        assert config.deb_url == STEAM_DEB_URL
        assert config.deb_path == "/tmp/steam_latest.deb"
        assert config.pacman_conf_path == "/etc/pacman.conf"
        assert config.executable == "steam"

    def test_config_is_frozen(self):
        config = InstallerConfig()
        with pytest.raises(ValidationError):
            config.executable = "other"

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"delay_seconds": -1}])
    def test_policy_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            RetryPolicy(**kwargs)


# ── YAML file ───────────────────────────────────────────────────────


class TestYamlFile:
    def test_values_applied(self, tmp_path):
        path = _write(tmp_path, "retry:\n  max_attempts: 5\n  delay_seconds: 0.5\ndeb_path: /var/tmp/s.deb\n")
        config = load_config(path, env={})
        assert config.retry == RetryPolicy(max_attempts=5, delay_seconds=0.5)
        assert config.deb_path == "/var/tmp/s.deb"

    def test_partial_retry_keeps_defaults(self, tmp_path):
        config = load_config(_write(tmp_path, "retry:\n  max_attempts: 1\n"), env={})
        assert config.retry.delay_seconds == 5.0

    def test_empty_file_is_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, ""), env={}) == InstallerConfig()

    def test_path_from_environment(self, tmp_path):
        path = _write(tmp_path, "executable: steam-runtime\n")
        config = load_config(env={"STEAM_INSTALLER_CONFIG": str(path)})
        assert config.executable == "steam-runtime"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml", env={})

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(_write(tmp_path, "retry: [unclosed\n"), env={})

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- a\n- b\n"), env={})

    def test_unknown_key_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid installer configuration"):
            load_config(_write(tmp_path, "retries: 3\n"), env={})

    def test_invalid_value_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "retry:\n  max_attempts: 0\n"), env={})


# ── Environment overrides ───────────────────────────────────────────


class TestEnvironment:
    def test_env_overrides_defaults(self):
        config = load_config(env={
            "STEAM_INSTALLER_MAX_RETRIES": "7",
            "STEAM_INSTALLER_RETRY_DELAY": "0",
        })
        assert config.retry.max_attempts == 7
        assert config.retry.delay_seconds == 0

    def test_env_beats_file(self, tmp_path):
        path = _write(tmp_path, "retry:\n  max_attempts: 2\n  delay_seconds: 1\n")
        config = load_config(path, env={"STEAM_INSTALLER_MAX_RETRIES": "4"})
        assert config.retry.max_attempts == 4
        assert config.retry.delay_seconds == 1

    def test_non_numeric_env_rejected(self):
        with pytest.raises(ConfigError):
            load_config(env={"STEAM_INSTALLER_MAX_RETRIES": "lots"})

    def test_env_with_non_mapping_retry(self, tmp_path):
        path = _write(tmp_path, "retry: 3\n")
        with pytest.raises(ConfigError, match="'retry' must be a mapping"):
            load_config(path, env={"STEAM_INSTALLER_RETRY_DELAY": "1"})
