"""
Tests for post-install verification — stale process cleanup and PATH check.
"""

import pytest

from steam_installer.adapters.mock import MockCommandRunner
from steam_installer.core.errors import VerificationFailedError
from steam_installer.core.services.verify import kill_stale_processes, verify_installation


class TracingRunner(MockCommandRunner):
    """Mock runner that prints a marker for each host interaction."""

    def run(self, command, *, capture=False):
        print(f"<run {command.display()}>")
        return super().run(command, capture=capture)

    def which(self, binary):
        print(f"<which {binary}>")
        return super().which(binary)


# ── Status lines ────────────────────────────────────────────────────


class TestVerifyReporting:
    def test_each_line_precedes_its_action(self, reporter, capsys):
        runner = TracingRunner(binaries=["steam"])

        verify_installation(runner, reporter=reporter)

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "[INFO] Killing any lingering steam steamwebhelper processes...",
            "<run killall steam steamwebhelper>",
            "[INFO] Verifying steam executable exists...",
            "<which steam>",
        ]

    def test_no_kill_line_without_process_names(self, reporter, capsys):
        runner = TracingRunner(binaries=["steam"])

        verify_installation(runner, process_names=(), reporter=reporter)

        out = capsys.readouterr().out
        assert "Killing" not in out
        assert runner.call_count() == 0

    def test_silent_without_reporter(self, capsys):
        verify_installation(MockCommandRunner(binaries=["steam"]))
        assert capsys.readouterr().out == ""


# ── Outcomes ────────────────────────────────────────────────────────


class TestVerifyOutcome:
    def test_returns_resolved_path(self):
        assert verify_installation(MockCommandRunner(binaries=["steam"])) == "/usr/bin/steam"

    def test_missing_executable_is_fatal_after_line(self, reporter, capsys):
        with pytest.raises(VerificationFailedError, match="'steam' executable not found"):
            verify_installation(MockCommandRunner(), reporter=reporter)
        assert "Verifying steam executable exists" in capsys.readouterr().out

    def test_killall_exit_status_ignored(self):
        runner = MockCommandRunner(binaries=["steam"])
        runner.set_failure(("killall", "steam"), returncode=1)
        kill_stale_processes(runner, ["steam"])
        assert runner.calls == [("killall", "steam")]
