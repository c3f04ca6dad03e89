"""
Retry executor — bounded, fixed-delay retries for flaky commands.

Package mirrors and networks fail transiently; a small bounded retry
absorbs most of that without hiding persistent failures. The executor
only knows whether a command exited successfully. Whether a final
failure is fatal is decided by the caller.

    attempt 1 ─fail─▶ sleep D ─▶ attempt 2 ─fail─▶ sleep D ─▶ … attempt N ─fail─▶ False
            └─ok─▶ True (no more attempts)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.config.loader import RetryPolicy
from steam_installer.core.models.command import Command, CommandResult
from steam_installer.core.observability.status import StatusReporter

logger = logging.getLogger(__name__)


@dataclass
class RetryResult:
    """What happened across all attempts of one command."""

    command: Command
    ok: bool = False
    attempts: int = 0
    waited_seconds: float = 0.0
    results: list[CommandResult] = field(default_factory=list)

    @property
    def last_error(self) -> str:
        for result in reversed(self.results):
            if result.error:
                return result.error
        return ""


class RetryExecutor:
    """Run commands under a fixed ``RetryPolicy``.

    Args:
        policy: Attempt budget and delay; shared by every call.
        runner: Where commands actually run.
        reporter: Optional status output for attempt/retry lines.
        sleep: Injected for tests; defaults to ``time.sleep``.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        runner: CommandRunner,
        *,
        reporter: StatusReporter | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.policy = policy
        self.runner = runner
        self.reporter = reporter
        self._sleep = sleep

    def attempt(self, command: Command) -> RetryResult:
        """Run ``command`` until it succeeds or the budget is spent."""
        outcome = RetryResult(command=command)
        budget = self.policy.max_attempts

        for number in range(1, budget + 1):
            message = f"Attempt {number}/{budget}: Running command: {command.display()}"
            if self.reporter:
                self.reporter.info(message)
            else:
                logger.info(message)

            result = self.runner.run(command)
            outcome.results.append(result)
            outcome.attempts = number

            if result.ok:
                outcome.ok = True
                return outcome

            if number < budget:
                warning = (
                    f"Command failed (exit {result.returncode}). "
                    f"Retrying in {self.policy.delay_seconds:g} seconds..."
                )
                if self.reporter:
                    self.reporter.warning(warning)
                else:
                    logger.warning(warning)
                self._sleep(self.policy.delay_seconds)
                outcome.waited_seconds += self.policy.delay_seconds

        logger.warning(
            "Command exhausted %d attempt(s): %s (%s)",
            budget, command.display(), outcome.last_error,
        )
        return outcome

    def run(self, command: Command) -> bool:
        """Boolean form of ``attempt``."""
        return self.attempt(command).ok
