"""
Steam installer — CLI entrypoint.

Usage:
    sudo steam-installer
    sudo python -m steam_installer --verbose
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from steam_installer import __version__
from steam_installer.core.observability.logging_config import (
    LOG_FILE_ENV_VAR,
    LOG_FILE_LEVEL_ENV_VAR,
    resolve_level,
    setup_logging,
)

_NEXT_STEPS = """\
------------------------------------------------------------
You can now launch Steam from your applications menu or by typing 'steam' in the terminal.
The first time you launch it, Steam will download its latest client files.
If Steam does not launch or encounters errors, ensure your graphics drivers are
properly installed and up-to-date.
------------------------------------------------------------"""


@click.command()
@click.version_option(version=__version__, prog_name="steam-installer")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only print warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to an installer YAML config (default: built-in settings).",
)
def cli(verbose: bool, quiet: bool, debug: bool, config_path: str | None) -> None:
    """Steam installer — install Steam on Debian, Fedora and Arch based systems.

    Must be run as root.
    """
    from steam_installer.adapters.shell.command import SubprocessCommandRunner
    from steam_installer.core.config.loader import ConfigError, load_config
    from steam_installer.core.errors import InstallerError
    from steam_installer.core.observability.status import StatusReporter
    from steam_installer.core.use_cases.install import run_install

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet, env=os.environ),
        log_file=os.environ.get(LOG_FILE_ENV_VAR),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV_VAR),
    )

    reporter = StatusReporter(quiet=quiet)
    reporter.info("Starting Steam installation for Linux.")

    try:
        config = load_config(Path(config_path) if config_path else None)
        run_install(config, SubprocessCommandRunner(), reporter)
    except (InstallerError, ConfigError) as e:
        reporter.error(str(e))
        sys.exit(1)

    reporter.success("Steam installation process completed!")
    if not quiet:
        click.echo()
        click.echo(_NEXT_STEPS)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
