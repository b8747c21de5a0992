"""Mailer use case: hold SMTP settings, build a message, dispatch it.

The mailer owns its configuration, picks one of three transport paths and
maps transport failures onto :class:`~mailnotify.domain.errors.DeliveryError`.
It keeps no connection between calls and takes no locks; treat an instance
as read-only while sends are in flight on other threads.
"""

from __future__ import annotations

import logging
import smtplib
import ssl

from ..domain.auth import LoginAuth, PlainAuth
from ..domain.cancellation import CancellationToken
from ..domain.enums import BodyFormat
from ..domain.errors import AuthenticationError, DeliveryError
from ..domain.message import OutboundMessage, build_message
from ..domain.transport_mode import ImplicitTLS, PlainTransport, StartTLS, TransportMode
from .ports import Authenticator, MailTransport

logger = logging.getLogger(__name__)

#: Prefix of every :class:`DeliveryError` raised by :meth:`Mailer.send`.
SEND_FAILURE_PREFIX = "failed to send mail"

_REDACTED = "[REDACTED]"


def _credentials_of(auth: Authenticator | None) -> tuple[str, ...]:
    """Collect the username and password an auth scheme carries, if any."""
    values: list[str] = []
    for name in ("username", "password"):
        value = getattr(auth, name, None)
        if isinstance(value, str) and value:
            values.append(value)
    return tuple(values)


def _sanitize_exception_message(exc: BaseException, credentials: tuple[str, ...] = ()) -> str:
    """Return the exception text with every configured credential masked.

    SMTP reply codes and server diagnostics stay readable; the full
    exception stays reachable through ``__cause__``.

    Example:
        >>> _sanitize_exception_message(ConnectionRefusedError("Connection refused"))
        'Connection refused'
        >>> _sanitize_exception_message(ValueError("bad password hunter2 for bob"), ("bob", "hunter2"))
        'bad password [REDACTED] for [REDACTED]'
        >>> _sanitize_exception_message(smtplib.SMTPException("504 5.7.4 Unrecognized authentication type"))
        '504 5.7.4 Unrecognized authentication type'
    """
    message = str(exc)
    # Longest first, so a password containing the username is masked whole.
    for secret in sorted(credentials, key=len, reverse=True):
        message = message.replace(secret, _REDACTED)
    return message or type(exc).__name__


class Mailer:
    """SMTP notification service.

    Example:
        >>> from mailnotify.adapters.memory import TransportSpy
        >>> spy = TransportSpy()
        >>> mailer = Mailer("a@x.com", "smtp.example.com:587", transport=spy)
        >>> mailer.add_receivers("b@x.com")
        >>> mailer.enable_starttls()
        >>> mailer.send("Hi", "body")
        >>> spy.calls[0].path
        'starttls'
    """

    def __init__(self, sender_address: str, smtp_host_addr: str, *, transport: MailTransport) -> None:
        self._sender_address = sender_address
        self._smtp_host_addr = smtp_host_addr
        self._transport = transport
        self._receiver_addresses: list[str] = []
        self._body_format = BodyFormat.HTML
        self._auth: Authenticator | None = None
        self._transport_mode: TransportMode = PlainTransport()
        # Implicit TLS requested while STARTTLS is active; restored by disable_starttls.
        self._tls_fallback: ImplicitTLS | None = None

    @property
    def sender_address(self) -> str:
        return self._sender_address

    @property
    def smtp_host_addr(self) -> str:
        return self._smtp_host_addr

    @property
    def receiver_addresses(self) -> tuple[str, ...]:
        return tuple(self._receiver_addresses)

    @property
    def body_format(self) -> BodyFormat:
        return self._body_format

    @property
    def auth(self) -> Authenticator | None:
        return self._auth

    @property
    def transport_mode(self) -> TransportMode:
        return self._transport_mode

    def set_auth(self, authenticator: Authenticator | None) -> None:
        """Install an authentication scheme, replacing any previous one."""
        self._auth = authenticator

    def set_plain_auth(self, identity: str, username: str, password: str, host: str) -> None:
        """Authenticate with AUTH PLAIN.

        ``host`` must match the name of the server the mailer connects to,
        otherwise the credentials are never sent.
        Example values: ``""``, ``"test@gmail.com"``, ``"password123"``, ``"smtp.gmail.com"``.
        """
        self._auth = PlainAuth(identity, username, password, host)

    def set_login_auth(self, username: str, password: str) -> None:
        """Authenticate with AUTH LOGIN.

        Needed for servers such as smtp.office365.com that answer AUTH PLAIN
        with ``504 5.7.4 Unrecognized authentication type``.
        """
        self._auth = LoginAuth(username, password)

    def add_receivers(self, *addresses: str) -> None:
        """Append addresses to the receiver list; duplicates are kept."""
        self._receiver_addresses.extend(addresses)

    def set_body_format(self, body_format: BodyFormat | str) -> None:
        """Select the body encoding; anything but plain text means HTML."""
        if body_format == BodyFormat.PLAIN_TEXT:
            self._body_format = BodyFormat.PLAIN_TEXT
        else:
            self._body_format = BodyFormat.HTML

    def enable_tls(self, tls_context: ssl.SSLContext | None = None) -> None:
        """Send over implicit TLS with optional TLS parameters.

        STARTTLS takes priority: while it is enabled this call logs a
        warning and STARTTLS stays active. The implicit TLS request is kept
        and takes over when STARTTLS is disabled.
        """
        self._tls_fallback = ImplicitTLS(tls_context)
        if isinstance(self._transport_mode, StartTLS):
            logger.warning(
                "Implicit TLS requested while STARTTLS is enabled; keeping STARTTLS until it is disabled",
                extra={"smtp_host": self._smtp_host_addr},
            )
            return
        self._transport_mode = self._tls_fallback

    def disable_tls(self) -> None:
        """Stop using implicit TLS and drop its TLS parameters."""
        self._tls_fallback = None
        if isinstance(self._transport_mode, ImplicitTLS):
            self._transport_mode = PlainTransport()

    def enable_starttls(self, tls_context: ssl.SSLContext | None = None) -> None:
        """Upgrade the connection with STARTTLS, using optional TLS parameters.

        An implicit TLS setting is suspended, not forgotten.
        """
        self._transport_mode = StartTLS(tls_context)

    def disable_starttls(self) -> None:
        """Stop using STARTTLS and drop its TLS parameters.

        Falls back to implicit TLS when it was enabled as well, otherwise
        to a plain connection.
        """
        if isinstance(self._transport_mode, StartTLS):
            self._transport_mode = self._tls_fallback or PlainTransport()

    def _new_message(self, subject: str, message: str) -> OutboundMessage:
        return build_message(
            self._receiver_addresses,
            self._sender_address,
            subject,
            message,
            use_plain_text=self._body_format is BodyFormat.PLAIN_TEXT,
        )

    def _dispatch(self, msg: OutboundMessage) -> None:
        mode = self._transport_mode
        if isinstance(mode, StartTLS):
            self._transport.send_with_starttls(self._smtp_host_addr, self._auth, msg, mode.tls_context)
        elif isinstance(mode, ImplicitTLS):
            self._transport.send_with_tls(self._smtp_host_addr, self._auth, msg, mode.tls_context)
        else:
            self._transport.send(self._smtp_host_addr, self._auth, msg)

    def send(self, subject: str, message: str, *, cancellation: CancellationToken | None = None) -> None:
        """Send ``message`` to every receiver added so far.

        The cancellation token is checked once, before any network I/O.
        A send that already started cannot be interrupted by it.

        Args:
            subject: Subject line.
            message: Body; HTML unless plain text was selected.
            cancellation: Optional token; when already triggered, its
                reason is raised as-is and nothing is sent.

        Raises:
            OperationCancelledError: (or the token's custom reason) when
                the token was triggered before dispatch.
            DeliveryError: When the transport fails; the original error is
                chained as ``__cause__``.
        """
        msg = self._new_message(subject, message)

        if cancellation is not None and cancellation.cancelled:
            logger.info("Mail send cancelled before dispatch", extra={"subject": subject})
            cancellation.raise_if_cancelled()

        logger.info(
            "Sending mail",
            extra={
                "smtp_host": self._smtp_host_addr,
                "transport": self._transport_mode.kind.value,
                "sender": self._sender_address,
                "recipients": list(msg.to),
                "subject": subject,
                "body_format": self._body_format.value,
            },
        )
        try:
            self._dispatch(msg)
        except (smtplib.SMTPException, OSError, AuthenticationError) as exc:
            logger.debug("SMTP delivery failed", exc_info=True)
            detail = _sanitize_exception_message(exc, _credentials_of(self._auth))
            raise DeliveryError(f"{SEND_FAILURE_PREFIX}: {detail}") from exc

        logger.info("Mail sent", extra={"smtp_host": self._smtp_host_addr, "recipients": list(msg.to)})


__all__ = ["SEND_FAILURE_PREFIX", "Mailer"]
