"""
Shared test fixtures and configuration.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from steam_installer.adapters.mock import MockCommandRunner
from steam_installer.core.config.loader import InstallerConfig, RetryPolicy
from steam_installer.core.engine.executor import RecipeExecutor
from steam_installer.core.observability.status import StatusReporter
from steam_installer.core.reliability.retry import RetryExecutor


class SleepRecorder:
    """Stands in for time.sleep; remembers every requested delay."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def total(self) -> float:
        return sum(self.calls)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def reporter() -> StatusReporter:
    return StatusReporter(color=False)


@pytest.fixture
def config(tmp_path: Path) -> InstallerConfig:
    """Installer config whose host files all live under tmp_path."""
    return InstallerConfig(
        retry=RetryPolicy(max_attempts=3, delay_seconds=5.0),
        deb_path=str(tmp_path / "steam_latest.deb"),
        os_release_path=str(tmp_path / "os-release"),
        redhat_release_path=str(tmp_path / "redhat-release"),
        pacman_conf_path=str(tmp_path / "pacman.conf"),
    )


@pytest.fixture
def make_executor(
    config: InstallerConfig,
    reporter: StatusReporter,
    sleeper: SleepRecorder,
) -> Callable[[MockCommandRunner], RecipeExecutor]:
    """Factory: a RecipeExecutor wired to the given mock runner."""

    def _make(runner: MockCommandRunner) -> RecipeExecutor:
        retry = RetryExecutor(config.retry, runner, reporter=reporter, sleep=sleeper)
        return RecipeExecutor(runner, retry, reporter, pacman_conf_path=config.pacman_conf_path)

    return _make
