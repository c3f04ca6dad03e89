"""
Status reporter — leveled, colored progress lines for the user.

info/success go to stdout, warning/error to stderr. Every line is
also sent to the ``steam_installer.status`` logger so a log file
captures the same story.
"""

from __future__ import annotations

import logging

import click

from steam_installer.core.observability.logging_config import STATUS_LOGGER

logger = logging.getLogger(STATUS_LOGGER)

_STYLES: dict[str, tuple[str, str]] = {
    "info": ("[INFO]", "blue"),
    "success": ("[SUCCESS]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


class StatusReporter:
    """Print status lines; ``quiet`` hides info and success."""

    def __init__(self, *, quiet: bool = False, color: bool | None = None):
        self.quiet = quiet
        self.color = color

    def _emit(self, kind: str, message: str) -> None:
        tag, fg = _STYLES[kind]
        err = kind in ("warning", "error")
        if self.quiet and not err:
            return
        click.secho(tag, fg=fg, bold=True, nl=False, err=err, color=self.color)
        click.echo(f" {message}", err=err, color=self.color)

    def info(self, message: str) -> None:
        logger.info(message)
        self._emit("info", message)

    def success(self, message: str) -> None:
        logger.info(message)
        self._emit("success", message)

    def warning(self, message: str) -> None:
        logger.warning(message)
        self._emit("warning", message)

    def error(self, message: str) -> None:
        logger.error(message)
        self._emit("error", message)
