"""
Post-install verification.

Stale Steam processes are killed so the next launch starts clean, then
the ``steam`` executable must resolve on PATH. A missing binary is
fatal even when every recipe step reported success.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.errors import VerificationFailedError
from steam_installer.core.models.command import Command
from steam_installer.core.observability.status import StatusReporter

logger = logging.getLogger(__name__)


def kill_stale_processes(
    runner: CommandRunner,
    process_names: Sequence[str],
    reporter: StatusReporter | None = None,
) -> None:
    """Best-effort ``killall``; "no process found" is not an error."""
    if not process_names:
        return
    if reporter:
        reporter.info(f"Killing any lingering {' '.join(process_names)} processes...")
    result = runner.run(Command.of("killall", *process_names), capture=True)
    if result.ok:
        logger.info("Killed lingering processes: %s", ", ".join(process_names))
    else:
        logger.debug("killall exited %d (no matching processes?)", result.returncode)


def verify_installation(
    runner: CommandRunner,
    executable: str = "steam",
    process_names: Sequence[str] = ("steam", "steamwebhelper"),
    *,
    reporter: StatusReporter | None = None,
) -> str:
    """Kill stale processes and confirm ``executable`` is on PATH.

    Returns:
        The resolved executable path.

    Raises:
        VerificationFailedError: The executable cannot be found.
    """
    kill_stale_processes(runner, process_names, reporter)

    if reporter:
        reporter.info(f"Verifying {executable} executable exists...")
    path = runner.which(executable)
    if path is None:
        raise VerificationFailedError(executable)
    logger.info("%s resolved to %s", executable, path)
    return path
