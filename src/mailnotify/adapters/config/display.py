"""Show the merged mailnotify settings for ``mailnotify config``.

Renders the layered configuration, typically the ``[email]`` and
``[lib_log_rich]`` sections, through lib_layered_config so every value is
annotated with the file or environment variable it came from and the SMTP
password is masked. Buffered log records are flushed first so they do not
land in the middle of the output.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from mailnotify.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Display configuration using lib_layered_config's Rich display.

    Args:
        config: Already-loaded layered configuration object to display.
        output_format: HUMAN for TOML-like display or JSON.
        section: Optional section name (e.g. ``"email"``) to display alone.
        console: Optional Rich Console for output, mainly for tests.
        profile: Optional profile name to include in provenance comments.

    Raises:
        ValueError: If a section was requested that doesn't exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(config, output_format=lib_format, section=section, profile=profile, console=console)


__all__ = ["display_config"]
