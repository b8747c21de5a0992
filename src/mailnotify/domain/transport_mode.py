"""Transport security modes as a single tagged variant.

A mailer is always in exactly one of these modes, so "TLS and STARTTLS
both enabled" cannot be represented.
"""

from __future__ import annotations

import ssl
from dataclasses import dataclass

from .enums import TransportKind


@dataclass(frozen=True, slots=True)
class PlainTransport:
    """Unencrypted SMTP; any TLS parameters are irrelevant."""

    kind = TransportKind.PLAIN


@dataclass(frozen=True, slots=True)
class ImplicitTLS:
    """SMTP over a TLS socket from the first byte.

    Attributes:
        tls_context: TLS parameters; ``None`` means the library default
            (certificate verification on, system trust store).
    """

    tls_context: ssl.SSLContext | None = None
    kind = TransportKind.TLS


@dataclass(frozen=True, slots=True)
class StartTLS:
    """Plain SMTP connection upgraded via the STARTTLS command.

    Attributes:
        tls_context: TLS parameters used for the upgrade; ``None`` means
            the library default.
    """

    tls_context: ssl.SSLContext | None = None
    kind = TransportKind.STARTTLS


TransportMode = PlainTransport | ImplicitTLS | StartTLS
"""Union of every supported transport mode."""


__all__ = [
    "ImplicitTLS",
    "PlainTransport",
    "StartTLS",
    "TransportMode",
]
