"""Adapters — bindings to the host's external programs.

Public re-exports for convenient access.
"""

from steam_installer.adapters.base import CommandRunner
from steam_installer.adapters.mock import MockCommandRunner
from steam_installer.adapters.shell.command import SubprocessCommandRunner

__all__ = [
    "CommandRunner",
    "MockCommandRunner",
    "SubprocessCommandRunner",
]
