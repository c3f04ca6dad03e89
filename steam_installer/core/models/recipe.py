"""
Recipe models — what the installer intends to do on a given host.

A recipe is an ordered list of steps for one distribution family.
Any step may carry a nested fallback recipe, which the executor runs
once the step has failed for good (after its whole retry budget).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from steam_installer.core.models.command import Command
from steam_installer.core.models.environment import DistroFamily


class StepAction(StrEnum):
    """How the executor carries out a step."""

    REQUIRE_BINARY = "require_binary"
    RUN_ONCE = "run_once"
    RUN_WITH_RETRY = "run_with_retry"
    ENABLE_MULTILIB = "enable_multilib"


class Severity(StrEnum):
    """What a step failure means for the run."""

    CRITICAL = "critical"
    RECOMMENDED = "recommended"


class RecipeStep(BaseModel):
    """One unit of provisioning work."""

    model_config = ConfigDict(frozen=True)

    label: str
    action: StepAction
    severity: Severity = Severity.CRITICAL
    command: Command | None = None
    binary: str | None = None           # REQUIRE_BINARY target
    skip_if_present: str | None = None  # no-op when this binary is on PATH
    fallback: InstallationRecipe | None = None
    remedy: str = ""                    # suggested manual fix, shown on failure
    success_message: str = ""

    @model_validator(mode="after")
    def _check_action_inputs(self) -> RecipeStep:
        if self.action in (StepAction.RUN_ONCE, StepAction.RUN_WITH_RETRY) and self.command is None:
            raise ValueError(f"step '{self.label}': {self.action} requires a command")
        if self.action == StepAction.REQUIRE_BINARY and not self.binary:
            raise ValueError(f"step '{self.label}': require_binary needs a binary")
        return self

    @property
    def critical(self) -> bool:
        return self.severity == Severity.CRITICAL


class InstallationRecipe(BaseModel):
    """Ordered steps for one distribution family (or a fallback sub-plan)."""

    model_config = ConfigDict(frozen=True)

    name: str
    family: DistroFamily
    steps: tuple[RecipeStep, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.steps)

    def commands(self) -> list[Command]:
        """Every command in the recipe, fallbacks included, in plan order."""
        found: list[Command] = []
        for step in self.steps:
            if step.command is not None:
                found.append(step.command)
            if step.fallback is not None:
                found.extend(step.fallback.commands())
        return found


RecipeStep.model_rebuild()
