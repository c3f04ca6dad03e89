"""
Privilege guard — refuse to run without root.

Checked exactly once, first thing, before detection or any mutation.
Later steps assume privilege holds for the rest of the process.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from steam_installer.core.errors import PrivilegeError

logger = logging.getLogger(__name__)


def ensure_privileged(geteuid: Callable[[], int] | None = None) -> None:
    """Raise ``PrivilegeError`` unless the effective uid is 0."""
    euid = (geteuid or os.geteuid)()
    if euid != 0:
        raise PrivilegeError(euid)
    logger.debug("Running with effective uid 0")
