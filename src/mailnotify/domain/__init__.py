"""Domain layer - pure mail logic with no I/O or framework dependencies.

Contents:
    * :mod:`.auth` - PLAIN and LOGIN authentication schemes
    * :mod:`.cancellation` - One-shot cooperative cancellation token
    * :mod:`.enums` - Domain enumerations (BodyFormat, TransportKind, AuthScheme, OutputFormat)
    * :mod:`.errors` - Domain exception types
    * :mod:`.message` - Outbound message value object and builder
    * :mod:`.transport_mode` - Tagged transport mode variant
"""

from __future__ import annotations

from .auth import LoginAuth, PlainAuth, ServerInfo
from .cancellation import CancellationToken
from .enums import AuthScheme, BodyFormat, OutputFormat, TransportKind
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DeadlineExceededError,
    DeliveryError,
    InvalidRecipientError,
    OperationCancelledError,
)
from .message import OutboundMessage, build_message
from .transport_mode import ImplicitTLS, PlainTransport, StartTLS, TransportMode

__all__ = [
    # Auth
    "LoginAuth",
    "PlainAuth",
    "ServerInfo",
    # Cancellation
    "CancellationToken",
    # Enums
    "AuthScheme",
    "BodyFormat",
    "OutputFormat",
    "TransportKind",
    # Errors
    "AuthenticationError",
    "ConfigurationError",
    "DeadlineExceededError",
    "DeliveryError",
    "InvalidRecipientError",
    "OperationCancelledError",
    # Message
    "OutboundMessage",
    "build_message",
    # Transport modes
    "ImplicitTLS",
    "PlainTransport",
    "StartTLS",
    "TransportMode",
]
