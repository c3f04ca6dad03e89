"""
pacman.conf multilib handling.

The transform is a pure text → text function over lines: locate the
``[multilib]`` header and the include directive directly below it by
exact match, uncomment both, and leave every other line untouched.
``ensure_multilib`` wraps it with file I/O and re-parses the written
file to verify the result.

Only a recognized commented pair is ever edited. A file with an
uncommented ``[multilib]`` header is left alone whatever its include
lines look like, and so is a file without any recognizable section.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

from steam_installer.core.errors import ConfigurationEditVerificationError

logger = logging.getLogger(__name__)

PACMAN_CONF_PATH = "/etc/pacman.conf"

HEADER = "[multilib]"
INCLUDE = "Include = /etc/pacman.d/mirrorlist"

# Bytes that are not UTF-8 round-trip unchanged through read and write.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class MultilibState(StrEnum):
    ENABLED = "enabled"
    COMMENTED = "commented"
    ABSENT = "absent"


def _is_header(line: str) -> bool:
    return line.strip() in (HEADER, f"#{HEADER}")


def _is_include(line: str) -> bool:
    return line.strip() in (INCLUDE, f"#{INCLUDE}")


def _locate(lines: list[str]) -> int | None:
    """Index of a multilib header immediately followed by its include line."""
    for i, line in enumerate(lines[:-1]):
        if _is_header(line) and _is_include(lines[i + 1]):
            return i
    return None


def multilib_state(text: str) -> MultilibState:
    """Classify the multilib section of a pacman.conf.

    COMMENTED means a header/include pair with at least one line still
    commented out, and no other active ``[multilib]`` header. ENABLED
    means an active header exists. Anything else is ABSENT.
    """
    lines = text.splitlines()
    active_header = any(line.strip() == HEADER for line in lines)

    index = _locate(lines)
    if index is not None:
        header, include = lines[index].strip(), lines[index + 1].strip()
        if (header, include) != (HEADER, INCLUDE):
            if header == HEADER or not active_header:
                return MultilibState.COMMENTED

    if active_header:
        return MultilibState.ENABLED
    return MultilibState.ABSENT


def _uncomment(line: str) -> str:
    """Drop the leading '#' while keeping indentation and line ending."""
    body = line.rstrip("\r\n")
    ending = line[len(body):]
    stripped = body.lstrip()
    indent = body[: len(body) - len(stripped)]
    if stripped.startswith("#"):
        stripped = stripped[1:]
    return f"{indent}{stripped}{ending}"


def enable_multilib(text: str) -> str:
    """Return ``text`` with the multilib header and include uncommented.

    Text whose state is not COMMENTED is returned unchanged.
    """
    if multilib_state(text) != MultilibState.COMMENTED:
        return text
    lines = text.splitlines(keepends=True)
    index = _locate([line.rstrip("\r\n") for line in lines])
    assert index is not None  # COMMENTED implies a located pair
    lines[index] = _uncomment(lines[index])
    lines[index + 1] = _uncomment(lines[index + 1])
    return "".join(lines)


def ensure_multilib(path: str | Path = PACMAN_CONF_PATH) -> MultilibState:
    """Make sure multilib is enabled in ``path``.

    Returns:
        The state found before any edit. Only COMMENTED files are
        rewritten; ENABLED and ABSENT files are left untouched.

    Raises:
        ConfigurationEditVerificationError: The file cannot be read, or
            the rewritten file does not read back as enabled.
    """
    path = Path(path)
    remedy = (
        f"Please manually uncomment [multilib] and its Include line in {path} "
        "and then re-run the installer. Aborting."
    )

    try:
        original = path.read_text(encoding=_ENCODING, errors=_ERRORS)
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        raise ConfigurationEditVerificationError(str(path), remedy=remedy) from e

    state = multilib_state(original)
    if state == MultilibState.ENABLED:
        logger.info("multilib already enabled in %s", path)
        return state
    if state == MultilibState.ABSENT:
        logger.warning("No commented [multilib] section found in %s; leaving it unchanged", path)
        return state

    try:
        path.write_text(enable_multilib(original), encoding=_ENCODING, errors=_ERRORS)
        written = path.read_text(encoding=_ENCODING, errors=_ERRORS)
    except OSError as e:
        logger.error("Cannot rewrite %s: %s", path, e)
        raise ConfigurationEditVerificationError(str(path), remedy=remedy) from e

    if multilib_state(written) != MultilibState.ENABLED:
        raise ConfigurationEditVerificationError(str(path), remedy=remedy)

    logger.info("Enabled multilib in %s", path)
    return state
