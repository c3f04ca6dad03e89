"""
Subprocess runner — execute commands on the real host.

This is the SINGLE PLACE where ``subprocess.run`` is called. Commands
are passed as argument vectors with ``shell=False``; nothing is ever
concatenated into a shell string. Package-manager output streams
straight to the terminal unless the caller asks to capture it.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.models.command import Command, CommandResult

logger = logging.getLogger(__name__)

# Conventional shell exit status for "command not found".
EXIT_NOT_FOUND = 127


class SubprocessCommandRunner(CommandRunner):
    """Run commands with ``subprocess.run``.

    There is no per-command timeout: package operations may block for
    as long as the package manager needs.
    """

    @property
    def name(self) -> str:
        return "subprocess"

    def which(self, binary: str) -> str | None:
        return shutil.which(binary)

    def run(self, command: Command, *, capture: bool = False) -> CommandResult:
        logger.debug("Executing: %s (cwd=%s)", command.display(), command.cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                list(command.argv),
                cwd=command.cwd,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(
                command=command,
                returncode=EXIT_NOT_FOUND,
                error=f"{command.program}: command not found",
            )
        except OSError as e:
            return CommandResult(
                command=command,
                returncode=EXIT_NOT_FOUND,
                error=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "").strip() if capture else ""
        stderr = (result.stderr or "").strip() if capture else ""

        outcome = CommandResult(
            command=command,
            returncode=result.returncode,
            duration_ms=elapsed_ms,
            stdout=stdout,
            error=None if command.succeeded(result.returncode)
            else (stderr or f"Command exited with code {result.returncode}"),
        )
        logger.debug(
            "Finished: %s → exit %d in %dms",
            command.display(), result.returncode, elapsed_ms,
        )
        return outcome
