"""
Install use case — privilege → detection → plan → execute → verify.

Every collaborator is injectable so the whole flow runs in tests
against a MockCommandRunner, a fake euid and a no-op sleep.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.config.loader import InstallerConfig
from steam_installer.core.engine.executor import RecipeExecutor
from steam_installer.core.models.environment import HostEnvironment
from steam_installer.core.models.outcome import RunReport
from steam_installer.core.observability.status import StatusReporter
from steam_installer.core.reliability.retry import RetryExecutor
from steam_installer.core.services.detection import detect_environment
from steam_installer.core.services.planner import build_recipe
from steam_installer.core.services.privilege import ensure_privileged
from steam_installer.core.services.verify import verify_installation

logger = logging.getLogger(__name__)

# Identities that install fine but deserve a word of caution.
_ADVISORIES = {
    "kali": (
        "Kali Linux is a specialized distribution for penetration testing. "
        "It is generally NOT recommended for gaming; expect rough edges."
    ),
}


@dataclass
class InstallResult:
    """What a successful run produced."""

    environment: HostEnvironment
    report: RunReport
    executable_path: str

    def to_dict(self) -> dict:
        return {
            "environment": self.environment.model_dump(mode="json"),
            "report": self.report.to_dict(),
            "executable_path": self.executable_path,
        }


def run_install(
    config: InstallerConfig,
    runner: CommandRunner,
    reporter: StatusReporter,
    *,
    geteuid: Callable[[], int] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> InstallResult:
    """Provision Steam on this host.

    Raises:
        InstallerError: Any fatal condition; nothing is rolled back.
    """
    ensure_privileged(geteuid)

    env = detect_environment(
        runner,
        os_release_path=config.os_release_path,
        redhat_release_path=config.redhat_release_path,
    )
    reporter.info(f"Detected distribution: {env.identity}")
    if env.identity in _ADVISORIES:
        reporter.warning(_ADVISORIES[env.identity])

    recipe = build_recipe(env, config)

    retry = RetryExecutor(config.retry, runner, reporter=reporter, sleep=sleep)
    executor = RecipeExecutor(runner, retry, reporter, pacman_conf_path=config.pacman_conf_path)
    report = executor.execute(recipe)

    path = verify_installation(
        runner, config.executable, config.process_names, reporter=reporter,
    )
    reporter.success(f"{config.executable} executable found at {path}.")

    return InstallResult(environment=env, report=report, executable_path=path)
