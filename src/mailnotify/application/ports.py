"""Application ports: Protocol definitions for adapter implementations.

Function ports define a ``__call__`` whose signature exactly matches the
corresponding adapter function, so existing module-level functions satisfy
them via structural subtyping (PEP 544). :class:`MailTransport` and
:class:`Authenticator` describe the SMTP collaborator the mailer drives.

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``MailerSettings``) are imported under ``TYPE_CHECKING``
    only so that import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.auth import ServerInfo
from ..domain.enums import OutputFormat
from ..domain.message import OutboundMessage

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.smtp.settings import MailerSettings


class Authenticator(Protocol):
    """SMTP authentication scheme consumed uniformly by the transport.

    Instances are ``smtplib`` authobjects: called once without a challenge
    for the optional initial response, then once per server challenge.
    """

    @property
    def mechanism(self) -> str:
        """SASL mechanism name sent with ``AUTH`` (e.g. ``PLAIN``)."""
        ...

    def start(self, server: ServerInfo) -> None:
        """Check the server before any credential leaves the process."""
        ...

    def __call__(self, challenge: bytes | None = None) -> str | None: ...


class MailTransport(Protocol):
    """Deliver one message per call over a fresh SMTP connection."""

    def send(self, host_addr: str, auth: Authenticator | None, message: OutboundMessage) -> None:
        """Send over an unencrypted connection."""
        ...

    def send_with_tls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        """Send over an implicit-TLS connection."""
        ...

    def send_with_starttls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        """Send over a connection upgraded with STARTTLS."""
        ...


class CreateTransport(Protocol):
    """Build a MailTransport for one CLI invocation."""

    def __call__(self, *, timeout: float | None = ...) -> MailTransport: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadMailerSettingsFromDict(Protocol):
    """Load MailerSettings from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailerSettings: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "Authenticator",
    "CreateTransport",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadMailerSettingsFromDict",
    "MailTransport",
]
