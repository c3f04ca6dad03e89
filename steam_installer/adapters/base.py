"""
Runner base — the contract between the installer and the host.

Every external program the installer touches goes through a
``CommandRunner``. The core only ever sees ``CommandResult`` objects,
so tests swap in ``MockCommandRunner`` and never spawn a process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from steam_installer.core.models.command import Command, CommandResult


class CommandRunner(ABC):
    """Abstract base class for command runners.

    Runners perform external side effects and return results.
    They NEVER raise for a failing program: a missing binary or a
    non-zero exit is captured in the CommandResult.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def run(self, command: Command, *, capture: bool = False) -> CommandResult:
        """Run a command to completion.

        Args:
            command: The invocation to perform.
            capture: Collect stdout into the result instead of letting
                it stream to the terminal.
        """

    @abstractmethod
    def which(self, binary: str) -> str | None:
        """Resolve a binary on PATH, or None when absent."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
