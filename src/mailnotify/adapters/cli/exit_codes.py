"""Exit codes for CLI error paths.

``SIGNAL_INT`` is informational: ``lib_cli_exit_tools`` translates
``KeyboardInterrupt`` into it, commands never raise it themselves.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes (errno and sysexits.h values).

    Example:
        >>> int(ExitCode.SMTP_FAILURE)
        69
        >>> ExitCode(78).name
        'CONFIG_ERROR'
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22
    SMTP_FAILURE = 69
    CONFIG_ERROR = 78
    SIGNAL_INT = 130


__all__ = ["ExitCode"]
