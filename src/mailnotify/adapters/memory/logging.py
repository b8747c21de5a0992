"""Logging stand-in for mailer tests that must not start lib_log_rich.

``build_testing`` wires :func:`init_logging_in_memory` so CLI and mailer
tests leave the global logging runtime untouched. Mailer log records still
reach stdlib logging and ``caplog``.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept the ``[lib_log_rich]`` section and configure nothing."""


__all__ = ["init_logging_in_memory"]
