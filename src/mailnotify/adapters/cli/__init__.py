"""Command-line interface for mailnotify.

Contents:
    * Root command group from :mod:`.root`
    * Entry point from :mod:`.main`
    * Subcommands from :mod:`.commands`
    * Exit codes from :mod:`.exit_codes`
"""

from __future__ import annotations

from .commands import cli_config, cli_info, cli_send
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "ExitCode",
    "cli",
    "cli_config",
    "cli_info",
    "cli_send",
    "main",
]
