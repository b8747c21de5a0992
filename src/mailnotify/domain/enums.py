"""Type-safe domain enums for body formats, transports, auth schemes and output."""

from __future__ import annotations

from enum import Enum


class BodyFormat(str, Enum):
    """Encoding of the message body.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        PLAIN_TEXT: Body is sent as ``text/plain``.
        HTML: Body is sent as ``text/html`` (the default).

    Example:
        >>> BodyFormat.PLAIN_TEXT.value
        'plain'
        >>> BodyFormat.HTML == "html"
        True
    """

    PLAIN_TEXT = "plain"
    HTML = "html"


class TransportKind(str, Enum):
    """Connection security selected for SMTP delivery.

    Attributes:
        PLAIN: Unencrypted connection.
        TLS: Implicit TLS from the first byte (SMTPS, usually port 465).
        STARTTLS: Plain connection upgraded with the STARTTLS command.

    Example:
        >>> TransportKind("starttls") is TransportKind.STARTTLS
        True
    """

    PLAIN = "plain"
    TLS = "tls"
    STARTTLS = "starttls"


class AuthScheme(str, Enum):
    """SMTP authentication mechanism selectable from configuration.

    Example:
        >>> AuthScheme.LOGIN.value
        'login'
    """

    NONE = "none"
    PLAIN = "plain"
    LOGIN = "login"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "AuthScheme",
    "BodyFormat",
    "OutputFormat",
    "TransportKind",
]
