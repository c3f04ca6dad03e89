"""
Execution outcome models — what actually happened during a run.

Every step produces a ``StepOutcome``; the executor never drops one.
``RunReport`` also records the branch state machine's transitions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

OutcomeStatus = Literal["ok", "skipped", "recovered", "warning", "failed"]


class BranchState(StrEnum):
    """Per-branch execution states."""

    NOT_STARTED = "not_started"
    STEP_RUNNING = "step_running"
    STEP_FAILED_RETRYING = "step_failed_retrying"
    STEP_FAILED_FALLBACK = "step_failed_fallback"
    STEP_FAILED_FATAL = "step_failed_fatal"
    BRANCH_COMPLETE = "branch_complete"


class StepOutcome(BaseModel):
    """Result of one recipe step."""

    label: str
    status: OutcomeStatus = "ok"
    attempts: int = 0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "skipped", "recovered")


class RunReport(BaseModel):
    """Everything the executor did for one recipe (fallbacks included)."""

    recipe: str
    state: BranchState = BranchState.NOT_STARTED
    outcomes: list[StepOutcome] = Field(default_factory=list)
    history: list[BranchState] = Field(default_factory=lambda: [BranchState.NOT_STARTED])

    def transition(self, state: BranchState) -> None:
        self.state = state
        self.history.append(state)

    def record(self, outcome: StepOutcome) -> StepOutcome:
        self.outcomes.append(outcome)
        return outcome

    @property
    def warnings(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.status == "warning"]

    @property
    def complete(self) -> bool:
        return self.state == BranchState.BRANCH_COMPLETE

    def labels(self) -> list[str]:
        return [o.label for o in self.outcomes]

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipe": self.recipe,
            "state": str(self.state),
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
            "warnings": len(self.warnings),
        }
