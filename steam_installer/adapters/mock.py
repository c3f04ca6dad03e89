"""
Mock runner — scripted test double for every command the installer runs.

By default every command succeeds and only the binaries given at
construction are on PATH. Tests script failures per argument vector,
and can make a successful command "install" a binary.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.models.command import Command, CommandResult


class MockCommandRunner(CommandRunner):
    """Universal mock runner for testing."""

    def __init__(
        self,
        binaries: Iterable[str] = (),
        default_returncode: int = 0,
    ):
        self._binaries: set[str] = set(binaries)
        self._default_returncode = default_returncode
        self._scripted: dict[tuple[str, ...], deque[int]] = {}
        self._always: dict[tuple[str, ...], int] = {}
        self._outputs: dict[tuple[str, ...], str] = {}
        self._provides: dict[tuple[str, ...], list[str]] = {}
        self._call_log: list[Command] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[Command]:
        """All commands this mock has received, in order."""
        return self._call_log

    @property
    def calls(self) -> list[tuple[str, ...]]:
        return [c.argv for c in self._call_log]

    def call_count(self, argv: Sequence[str] | None = None) -> int:
        """Number of runs, optionally of one specific argument vector."""
        if argv is None:
            return len(self._call_log)
        key = tuple(argv)
        return sum(1 for c in self._call_log if c.argv == key)

    def add_binary(self, binary: str) -> None:
        self._binaries.add(binary)

    def remove_binary(self, binary: str) -> None:
        self._binaries.discard(binary)

    def set_returncodes(self, argv: Sequence[str], codes: Iterable[int]) -> None:
        """Queue exit codes for ``argv``; the default applies once drained."""
        self._scripted[tuple(argv)] = deque(codes)

    def set_failure(self, argv: Sequence[str], times: int | None = None, returncode: int = 1) -> None:
        """Fail ``argv`` ``times`` times then succeed, or forever when None."""
        key = tuple(argv)
        if times is None:
            self._always[key] = returncode
        else:
            self._scripted[key] = deque([returncode] * times)

    def set_output(self, argv: Sequence[str], stdout: str) -> None:
        """Stdout returned for ``argv`` when the caller captures output."""
        self._outputs[tuple(argv)] = stdout

    def provides(self, argv: Sequence[str], *binaries: str) -> None:
        """A successful run of ``argv`` puts ``binaries`` on PATH."""
        self._provides.setdefault(tuple(argv), []).extend(binaries)

    def reset(self) -> None:
        self._call_log.clear()

    def which(self, binary: str) -> str | None:
        if binary in self._binaries:
            return f"/usr/bin/{binary}"
        return None

    def run(self, command: Command, *, capture: bool = False) -> CommandResult:
        self._call_log.append(command)
        key = command.argv

        if key in self._always:
            returncode = self._always[key]
        elif self._scripted.get(key):
            returncode = self._scripted[key].popleft()
        else:
            returncode = self._default_returncode

        ok = command.succeeded(returncode)
        if ok:
            for binary in self._provides.get(key, []):
                self._binaries.add(binary)

        return CommandResult(
            command=command,
            returncode=returncode,
            stdout=self._outputs.get(key, "") if capture else "",
            error=None if ok else f"[mock] exit {returncode}",
        )
