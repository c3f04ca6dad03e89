"""
Installer error taxonomy.

Every fatal condition has its own type. Each error carries a
``remedy``: the manual step the user can take before re-running.
The CLI turns any ``InstallerError`` into a red message and exit
status 1; nothing in between catches them.

``RecommendedStepExhaustedError`` is the one non-fatal member: the
executor records it as a warning and keeps going.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for installer failures."""

    def __init__(self, message: str, *, remedy: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.remedy = remedy

    def __str__(self) -> str:
        if self.remedy:
            return f"{self.message} {self.remedy}"
        return self.message


class PrivilegeError(InstallerError):
    """The process is not running as root."""

    def __init__(self, euid: int) -> None:
        super().__init__(
            f"This installer must be run as root (effective uid is {euid}).",
            remedy="Please use: sudo steam-installer",
        )
        self.euid = euid


class UnsupportedEnvironmentError(InstallerError):
    """The detected distribution has no installation recipe."""

    def __init__(self, identity: str, *, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Unsupported distribution: {identity}{detail}. This installer supports "
            "Debian/Ubuntu, Fedora/RHEL, and Arch-based distributions.",
            remedy="Please install Steam manually for your distribution. Aborting.",
        )
        self.identity = identity


class CriticalStepExhaustedError(InstallerError):
    """A critical step failed after its whole retry budget."""

    def __init__(self, label: str, *, attempts: int = 1, remedy: str = "") -> None:
        noun = "attempt" if attempts == 1 else "attempts"
        super().__init__(
            f"Critical step failed after {attempts} {noun}: {label}.",
            remedy=remedy or "Manual intervention may be required. Aborting.",
        )
        self.label = label
        self.attempts = attempts


class ConfigurationEditVerificationError(InstallerError):
    """An automated edit of a system config file could not be confirmed."""

    def __init__(self, path: str, *, remedy: str = "") -> None:
        super().__init__(
            f"Could not verify the automated edit of {path}.",
            remedy=remedy,
        )
        self.path = path


class VerificationFailedError(InstallerError):
    """Every step reported success but the result is not usable."""

    def __init__(self, executable: str) -> None:
        super().__init__(
            f"'{executable}' executable not found in PATH after installation. "
            "This indicates a critical failure.",
            remedy="Check the output above for the step that did not place the binary. Aborting.",
        )
        self.executable = executable


class RecommendedStepExhaustedError(InstallerError):
    """A recommended step failed; logged as a warning only."""

    def __init__(self, label: str, *, attempts: int = 1) -> None:
        super().__init__(
            f"Could not complete recommended step after {attempts} attempt(s): {label}.",
            remedy="This is not critical. Continuing...",
        )
        self.label = label
        self.attempts = attempts
