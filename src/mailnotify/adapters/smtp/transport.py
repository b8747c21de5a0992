"""SMTP transport built on :mod:`smtplib`.

Provides :class:`SmtplibTransport`, the production implementation of the
``MailTransport`` port. Every call opens its own connection, optionally
secures it, authenticates, transmits one message and closes it again.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import Any

from mailnotify.application.ports import Authenticator
from mailnotify.domain.auth import ServerInfo
from mailnotify.domain.enums import TransportKind
from mailnotify.domain.message import OutboundMessage

logger = logging.getLogger(__name__)


def split_host_port(host_addr: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts; a missing port becomes 0.

    Port 0 lets :mod:`smtplib` pick its default (25, or 465 for SMTPS).
    Bracketed IPv6 literals are unwrapped.

    Raises:
        smtplib.SMTPException: When the port is not a number in 1-65535 or
            an IPv6 literal is unterminated.

    Example:
        >>> split_host_port("smtp.example.com:587")
        ('smtp.example.com', 587)
        >>> split_host_port("[::1]:25")
        ('::1', 25)
        >>> split_host_port("smtp.example.com")
        ('smtp.example.com', 0)
    """
    if host_addr.startswith("["):
        host, sep, rest = host_addr[1:].partition("]")
        if not sep:
            raise smtplib.SMTPException(f"invalid SMTP address {host_addr!r}: missing closing bracket")
        port_text = rest[1:] if rest.startswith(":") else rest
    else:
        host, _, port_text = host_addr.rpartition(":") if ":" in host_addr else (host_addr, "", "")
    if not port_text:
        return host, 0
    if not port_text.isdigit() or not 1 <= int(port_text) <= 65535:
        raise smtplib.SMTPException(f"invalid SMTP address {host_addr!r}: bad port {port_text!r}")
    return host, int(port_text)


def render_message(message: OutboundMessage) -> EmailMessage:
    """Turn an :class:`OutboundMessage` into a MIME message.

    Adds ``Date`` and ``Message-ID``; the HTML body wins when set,
    otherwise the plain-text body is used.

    Example:
        >>> msg = OutboundMessage(to=("b@x.com",), sender="a@x.com", subject="Hi", html="<b>x</b>")
        >>> rendered = render_message(msg)
        >>> rendered["To"], rendered.get_content_type()
        ('b@x.com', 'text/html')
    """
    email = EmailMessage()
    email["From"] = message.sender
    if message.to:
        email["To"] = ", ".join(message.to)
    email["Subject"] = message.subject
    email["Date"] = formatdate(localtime=True)
    email["Message-ID"] = make_msgid()
    for name, value in message.headers.items():
        email[name] = value
    if message.html:
        email.set_content(message.html, subtype="html")
    else:
        email.set_content(message.text)
    return email


class SmtplibTransport:
    """Production ``MailTransport`` backed by :mod:`smtplib`.

    Args:
        timeout: Socket timeout in seconds; ``None`` keeps the socket default.
        local_hostname: Name sent with EHLO/HELO; ``None`` lets smtplib
            use the local FQDN.
    """

    def __init__(self, *, timeout: float | None = None, local_hostname: str | None = None) -> None:
        self.timeout = timeout
        self.local_hostname = local_hostname

    def send(self, host_addr: str, auth: Authenticator | None, message: OutboundMessage) -> None:
        self._deliver(host_addr, auth, message, kind=TransportKind.PLAIN, tls_context=None)

    def send_with_tls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        self._deliver(host_addr, auth, message, kind=TransportKind.TLS, tls_context=tls_context)

    def send_with_starttls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        self._deliver(host_addr, auth, message, kind=TransportKind.STARTTLS, tls_context=tls_context)

    def _connect(self, host: str, port: int, kind: TransportKind, tls_context: ssl.SSLContext | None) -> smtplib.SMTP:
        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.local_hostname is not None:
            kwargs["local_hostname"] = self.local_hostname
        if kind is TransportKind.TLS:
            context = tls_context if tls_context is not None else ssl.create_default_context()
            return smtplib.SMTP_SSL(host, port, context=context, **kwargs)
        return smtplib.SMTP(host, port, **kwargs)

    def _deliver(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        *,
        kind: TransportKind,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        host, port = split_host_port(host_addr)
        try:
            email = render_message(message)
        except ValueError as exc:
            raise smtplib.SMTPException(f"message cannot be encoded: {exc}") from exc
        logger.debug("Connecting to SMTP server", extra={"host": host, "port": port, "transport": kind.value})
        with self._connect(host, port, kind, tls_context) as smtp:
            smtp.ehlo_or_helo_if_needed()
            if kind is TransportKind.STARTTLS:
                smtp.starttls(context=tls_context if tls_context is not None else ssl.create_default_context())
                smtp.ehlo()
            if auth is not None:
                _authenticate(smtp, host, auth, encrypted=kind is not TransportKind.PLAIN)
            smtp.send_message(email, from_addr=message.sender, to_addrs=list(message.to))


def create_smtp_transport(*, timeout: float | None = None) -> SmtplibTransport:
    """Build the production transport with the configured socket timeout."""
    return SmtplibTransport(timeout=timeout)


def _authenticate(smtp: smtplib.SMTP, host: str, auth: Authenticator, *, encrypted: bool) -> None:
    """Run the AUTH exchange for ``auth`` on an open connection.

    Raises:
        smtplib.SMTPNotSupportedError: When the server does not offer AUTH.
        AuthenticationError: When the scheme refuses the server.
        smtplib.SMTPAuthenticationError: When the server rejects the credentials.
        smtplib.SMTPException: When a credential is not ASCII, which smtplib
            cannot transmit.
    """
    if not smtp.has_extn("auth"):
        raise smtplib.SMTPNotSupportedError("SMTP AUTH extension not supported by server.")
    mechanisms = tuple(str(smtp.esmtp_features.get("auth", "")).upper().split())
    auth.start(ServerInfo(name=host, tls=encrypted, mechanisms=mechanisms))
    try:
        smtp.auth(auth.mechanism, auth)
    except UnicodeEncodeError as exc:
        # The codec message quotes the offending character; keep it out of the text.
        raise smtplib.SMTPException(f"AUTH {auth.mechanism} credentials must be ASCII") from exc


__all__ = ["SmtplibTransport", "create_smtp_transport", "render_message", "split_host_port"]
