"""Static package metadata surfaced to CLI commands and documentation.

Values here are the single source of truth for the console script name,
the version string and the ``lib_layered_config`` identifiers that decide
where configuration files are discovered on each platform.
"""

from __future__ import annotations

from typing import Final

#: Distribution name as published on the index.
name: Final[str] = "mailnotify"
#: One-line description shown in ``--help``.
title: Final[str] = "SMTP notification adapter with TLS, STARTTLS and pluggable authentication"
version: Final[str] = "1.0.0"
homepage: Final[str] = "https://github.com/bitranox/mailnotify"
author: Final[str] = "bitranox"
author_email: Final[str] = "bitranox@gmail.com"
shell_command: Final[str] = "mailnotify"

#: Vendor/app/slug triple consumed by lib_layered_config path discovery.
LAYEREDCONF_VENDOR: Final[str] = "bitranox"
LAYEREDCONF_APP: Final[str] = "Mailnotify"
LAYEREDCONF_SLUG: Final[str] = "mailnotify"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for mailnotify:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
