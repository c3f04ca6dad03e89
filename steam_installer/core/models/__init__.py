"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from steam_installer.core.models import Command, InstallationRecipe, HostEnvironment
"""

from steam_installer.core.models.command import Command, CommandResult
from steam_installer.core.models.environment import (
    FAMILY_BY_IDENTITY,
    UNKNOWN_IDENTITY,
    DistroFamily,
    HostEnvironment,
    family_for,
)
from steam_installer.core.models.outcome import BranchState, RunReport, StepOutcome
from steam_installer.core.models.recipe import (
    InstallationRecipe,
    RecipeStep,
    Severity,
    StepAction,
)

__all__ = [
    # command.py
    "Command",
    "CommandResult",
    # environment.py
    "DistroFamily",
    "FAMILY_BY_IDENTITY",
    "HostEnvironment",
    "UNKNOWN_IDENTITY",
    "family_for",
    # outcome.py
    "BranchState",
    "RunReport",
    "StepOutcome",
    # recipe.py
    "InstallationRecipe",
    "RecipeStep",
    "Severity",
    "StepAction",
]
