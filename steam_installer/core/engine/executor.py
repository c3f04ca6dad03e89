"""
Recipe executor — runs an installation recipe step by step.

Flow per step:
    skip_if_present? → perform (once / with retries / file edit)
        ok          → next step
        failed      → fallback recipe?  → run it, step recovered
                    → critical?         → CriticalStepExhaustedError
                    → recommended       → warning, next step

A step's fallback only runs after the step has failed for good, i.e.
after the Retry Executor has spent the whole budget. Fallback recipes
are ordinary recipes and may nest their own fallbacks.
"""

from __future__ import annotations

import logging
from pathlib import Path

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.errors import (
    ConfigurationEditVerificationError,
    CriticalStepExhaustedError,
    RecommendedStepExhaustedError,
)
from steam_installer.core.models.outcome import BranchState, RunReport, StepOutcome
from steam_installer.core.models.recipe import InstallationRecipe, RecipeStep, StepAction
from steam_installer.core.observability.status import StatusReporter
from steam_installer.core.reliability.retry import RetryExecutor
from steam_installer.core.services.pacman_conf import (
    PACMAN_CONF_PATH,
    MultilibState,
    ensure_multilib,
)

logger = logging.getLogger(__name__)


class RecipeExecutor:
    """Execute recipes against a host through a CommandRunner."""

    def __init__(
        self,
        runner: CommandRunner,
        retry: RetryExecutor,
        reporter: StatusReporter,
        *,
        pacman_conf_path: str | Path = PACMAN_CONF_PATH,
    ):
        self.runner = runner
        self.retry = retry
        self.reporter = reporter
        self.pacman_conf_path = Path(pacman_conf_path)

    def execute(self, recipe: InstallationRecipe) -> RunReport:
        """Run every step of ``recipe``; raise on the first fatal failure."""
        report = RunReport(recipe=recipe.name)
        self.reporter.info(f"Running installation for {recipe.name} ({len(recipe)} steps)...")
        self._run_steps(recipe, report)
        report.transition(BranchState.BRANCH_COMPLETE)
        logger.info(
            "Recipe '%s' complete: %d outcomes, %d warnings",
            recipe.name, len(report.outcomes), len(report.warnings),
        )
        return report

    def _run_steps(self, recipe: InstallationRecipe, report: RunReport) -> None:
        for step in recipe.steps:
            self._run_step(step, report)

    def _run_step(self, step: RecipeStep, report: RunReport) -> None:
        report.transition(BranchState.STEP_RUNNING)
        self.reporter.info(f"{step.label}...")

        if step.skip_if_present and self.runner.which(step.skip_if_present):
            report.record(StepOutcome(
                label=step.label, status="skipped",
                detail=f"{step.skip_if_present} already present",
            ))
            self.reporter.success(f"{step.skip_if_present} already present.")
            return

        ok, attempts, detail = self._perform(step, report)

        if ok:
            report.record(StepOutcome(label=step.label, status="ok", attempts=attempts, detail=detail))
            self.reporter.success(step.success_message or f"{step.label}: done.")
            return

        if step.fallback is not None:
            report.transition(BranchState.STEP_FAILED_FALLBACK)
            self.reporter.warning(
                f"{step.label} failed after {attempts} attempt(s). "
                f"Running fallback '{step.fallback.name}'."
            )
            self._run_steps(step.fallback, report)
            report.record(StepOutcome(
                label=step.label, status="recovered", attempts=attempts,
                detail=f"recovered by {step.fallback.name}",
            ))
            return

        if step.critical:
            report.transition(BranchState.STEP_FAILED_FATAL)
            report.record(StepOutcome(label=step.label, status="failed", attempts=attempts, detail=detail))
            raise CriticalStepExhaustedError(step.label, attempts=attempts, remedy=step.remedy)

        warning = RecommendedStepExhaustedError(step.label, attempts=attempts)
        report.record(StepOutcome(label=step.label, status="warning", attempts=attempts, detail=detail))
        self.reporter.warning(str(warning))

    def _perform(self, step: RecipeStep, report: RunReport) -> tuple[bool, int, str]:
        """Carry out one step. Returns ``(ok, attempts, detail)``."""
        match step.action:
            case StepAction.REQUIRE_BINARY:
                assert step.binary is not None  # enforced by RecipeStep
                path = self.runner.which(step.binary)
                return path is not None, 1, path or f"{step.binary} not on PATH"

            case StepAction.RUN_ONCE:
                assert step.command is not None
                result = self.runner.run(step.command)
                return result.ok, 1, result.error or ""

            case StepAction.RUN_WITH_RETRY:
                assert step.command is not None
                outcome = self.retry.attempt(step.command)
                if outcome.attempts > 1:
                    report.transition(BranchState.STEP_FAILED_RETRYING)
                return outcome.ok, outcome.attempts, outcome.last_error

            case StepAction.ENABLE_MULTILIB:
                try:
                    found = ensure_multilib(self.pacman_conf_path)
                except ConfigurationEditVerificationError:
                    report.transition(BranchState.STEP_FAILED_FATAL)
                    report.record(StepOutcome(label=step.label, status="failed", attempts=1))
                    raise
                match found:
                    case MultilibState.COMMENTED:
                        return True, 1, f"uncommented [multilib] in {self.pacman_conf_path}"
                    case MultilibState.ENABLED:
                        return True, 1, "already enabled"
                    case _:
                        self.reporter.warning(
                            f"No commented [multilib] section found in {self.pacman_conf_path}; "
                            "left unchanged. 32-bit packages may fail to resolve."
                        )
                        return True, 1, "no commented section found"

        raise ValueError(f"Unknown step action: {step.action}")
