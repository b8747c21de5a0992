"""Application layer - use cases and port definitions.

Contains the mailer use case that orchestrates domain logic and the port
protocols that define the interfaces for adapter implementations.

Contents:
    * :mod:`.mailer` - Mailer configuration, dispatch and error mapping
    * :mod:`.ports` - Protocol definitions for adapters
"""

from __future__ import annotations

from .mailer import SEND_FAILURE_PREFIX, Mailer
from .ports import (
    Authenticator,
    CreateTransport,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadMailerSettingsFromDict,
    MailTransport,
)

__all__ = [
    "SEND_FAILURE_PREFIX",
    "Authenticator",
    "CreateTransport",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailerSettingsFromDict",
    "MailTransport",
    "Mailer",
]
