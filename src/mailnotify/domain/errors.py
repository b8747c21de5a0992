"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required settings such as the sender address or the SMTP
    host are absent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> err = ConfigurationError("No SMTP host configured")
        >>> str(err)
        'No SMTP host configured'
    """


class DeliveryError(Exception):
    """Mail delivery failed at the SMTP transport level.

    Wraps whatever the transport raised (DNS failure, refused connection,
    TLS handshake failure, rejected credentials or recipients). The
    original exception is kept as ``__cause__``.

    Example:
        >>> err = DeliveryError("failed to send mail: Connection refused")
        >>> str(err).startswith("failed to send mail")
        True
    """


class OperationCancelledError(Exception):
    """The cancellation token was triggered before dispatch started.

    Example:
        >>> str(OperationCancelledError())
        'operation cancelled'
    """

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(OperationCancelledError):
    """The cancellation token's deadline passed before dispatch started.

    Example:
        >>> isinstance(DeadlineExceededError(), OperationCancelledError)
        True
    """

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)


class AuthenticationError(Exception):
    """An authentication scheme refused to continue the SMTP AUTH exchange.

    Raised before credentials are sent (unencrypted connection, host
    mismatch) or when the server sends a challenge the scheme cannot answer.

    Example:
        >>> str(AuthenticationError("wrong host name"))
        'wrong host name'
    """


class InvalidRecipientError(ValueError):
    """Email address validation failure.

    Inherits from ValueError so ``except ValueError`` handlers catch it.

    Example:
        >>> err = InvalidRecipientError("Invalid recipient: not-an-email")
        >>> isinstance(err, ValueError)
        True
    """


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "DeadlineExceededError",
    "DeliveryError",
    "InvalidRecipientError",
    "OperationCancelledError",
]
