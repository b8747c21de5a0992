"""Public package surface exposing the mailer, auth schemes and metadata.

Routes imports through the proper architectural layers:
- Domain exports: message, auth schemes, transport modes, cancellation, errors
- Application exports: the Mailer use case
- Composition exports: production-wired factories and configuration
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.mailer import Mailer

# Composition exports (wired adapters)
from .composition import get_config, new_mailer

# Domain exports
from .domain import (
    BodyFormat,
    CancellationToken,
    DeadlineExceededError,
    DeliveryError,
    ImplicitTLS,
    LoginAuth,
    OperationCancelledError,
    OutboundMessage,
    PlainAuth,
    PlainTransport,
    StartTLS,
    build_message,
)

__all__ = [
    "BodyFormat",
    "CancellationToken",
    "DeadlineExceededError",
    "DeliveryError",
    "ImplicitTLS",
    "LoginAuth",
    "Mailer",
    "OperationCancelledError",
    "OutboundMessage",
    "PlainAuth",
    "PlainTransport",
    "StartTLS",
    "build_message",
    "get_config",
    "new_mailer",
    "print_info",
]
