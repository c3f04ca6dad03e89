"""
Environment detection — which distribution is this host?

Sources are tried in priority order; the first non-empty answer wins:

    1. /etc/os-release        ID=… field
    2. lsb_release -is        if on PATH
    3. /etc/redhat-release    first whitespace-delimited token
    4. "unknown"

Read-only and static: no retries, no network. Detection never aborts;
every problem falls through to the next source and finally to the
"unknown" sentinel, which the planner rejects.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from steam_installer.adapters.base import CommandRunner
from steam_installer.core.models.command import Command
from steam_installer.core.models.environment import (
    UNKNOWN_IDENTITY,
    DistroFamily,
    HostEnvironment,
    family_for,
)

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"
REDHAT_RELEASE_PATH = "/etc/redhat-release"

# rpm macro that expands to the release major version, per identity.
_RPM_VERSION_MACROS = {
    "fedora": "%fedora",
    "centos": "%rhel",
    "rhel": "%rhel",
}


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release ``KEY=value`` lines (shell-style quoting)."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw.strip().strip("\"'")]
        fields[key.strip()] = " ".join(parts)
    return fields


def _major(version: str | None) -> str | None:
    if not version:
        return None
    head = version.strip().split(".", 1)[0]
    return head if head.isdigit() else None


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except (FileNotFoundError, IsADirectoryError):
        return None
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None


def _from_os_release(path: Path) -> tuple[str, str | None] | None:
    text = _read_text(path)
    if text is None:
        return None
    fields = parse_os_release(text)
    identity = fields.get("ID", "").strip()
    if not identity:
        logger.debug("%s has no ID field", path)
        return None
    return identity, _major(fields.get("VERSION_ID"))


def _from_lsb_release(runner: CommandRunner) -> str | None:
    if runner.which("lsb_release") is None:
        return None
    result = runner.run(Command.of("lsb_release", "-is"), capture=True)
    if not result.ok:
        logger.debug("lsb_release failed: %s", result.error)
        return None
    return result.stdout.strip() or None


def _from_release_marker(path: Path) -> str | None:
    text = _read_text(path)
    if text is None:
        return None
    tokens = text.split()
    return tokens[0] if tokens else None


def _query_rpm_version(identity: str, runner: CommandRunner) -> str | None:
    macro = _RPM_VERSION_MACROS.get(identity)
    if macro is None or runner.which("rpm") is None:
        return None
    result = runner.run(Command.of("rpm", "-E", macro), capture=True)
    if not result.ok:
        return None
    # An undefined macro expands to itself ("%fedora"): not a version.
    return _major(result.stdout)


def detect_environment(
    runner: CommandRunner,
    *,
    os_release_path: str | Path = OS_RELEASE_PATH,
    redhat_release_path: str | Path = REDHAT_RELEASE_PATH,
) -> HostEnvironment:
    """Detect the host distribution.

    Returns:
        A HostEnvironment whose identity is lowercase and never empty.
    """
    identity: str | None = None
    version: str | None = None
    source = "none"

    found = _from_os_release(Path(os_release_path))
    if found is not None:
        identity, version = found
        source = "os-release"

    if identity is None:
        identity = _from_lsb_release(runner)
        if identity:
            source = "lsb_release"

    if identity is None:
        identity = _from_release_marker(Path(redhat_release_path))
        if identity:
            source = "redhat-release"

    identity = (identity or UNKNOWN_IDENTITY).strip().lower() or UNKNOWN_IDENTITY

    if version is None and family_for(identity) == DistroFamily.RPM_LIKE:
        version = _query_rpm_version(identity, runner)

    env = HostEnvironment.from_identity(identity, version_major=version, source=source)
    logger.info(
        "Detected distribution %s (family=%s, version=%s, source=%s)",
        env.identity, env.family, env.version_major or "?", env.source,
    )
    return env
