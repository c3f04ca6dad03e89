"""
Command and CommandResult models — the invocation contract.

Commands are argument vectors, never shell strings. Results carry the
exit status, which is the only thing the installer trusts about an
external program. Runners return results; they never raise for a
non-zero exit.
"""

from __future__ import annotations

import shlex

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Command(BaseModel):
    """An external program invocation.

    ``ok_codes`` is the expected-success predicate: any exit status in
    the set counts as success.
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    cwd: str | None = None
    ok_codes: frozenset[int] = Field(default_factory=lambda: frozenset({0}))

    @field_validator("argv")
    @classmethod
    def _argv_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("argv must contain at least the program name")
        return value

    @classmethod
    def of(cls, *argv: str, cwd: str | None = None) -> Command:
        """Shorthand: ``Command.of("apt", "update")``."""
        return cls(argv=tuple(argv), cwd=cwd)

    @property
    def program(self) -> str:
        return self.argv[0]

    def succeeded(self, returncode: int) -> bool:
        return returncode in self.ok_codes

    def display(self) -> str:
        """Shell-quoted rendering for logs and messages."""
        return " ".join(shlex.quote(a) for a in self.argv)

    def __str__(self) -> str:
        return self.display()


class CommandResult(BaseModel):
    """Outcome of a single command invocation."""

    command: Command
    returncode: int
    duration_ms: int = 0
    stdout: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the exit status satisfies the command's predicate."""
        return self.command.succeeded(self.returncode)

    @property
    def failed(self) -> bool:
        return not self.ok
