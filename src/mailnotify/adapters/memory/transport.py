"""In-memory mail transport for testing.

Provides a transport that satisfies the ``MailTransport`` port but opens
no sockets.

Contents:
    * :class:`TransportCall` - One recorded transport invocation.
    * :class:`TransportSpy` - Captures transport calls for test assertions.
    * :func:`load_mailer_settings_from_dict_in_memory` - In-memory settings loader.
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mailnotify.application.ports import Authenticator
from mailnotify.domain.message import OutboundMessage

from ..smtp.settings import MailerSettings


@dataclass(frozen=True, slots=True)
class TransportCall:
    """Arguments of one transport invocation.

    Attributes:
        path: ``"plain"``, ``"tls"`` or ``"starttls"``.
        host_addr: ``host:port`` the mailer targeted.
        auth: Authenticator handed to the transport, if any.
        message: The message that would have been sent.
        tls_context: TLS parameters, always ``None`` on the plain path.
    """

    path: str
    host_addr: str
    auth: Authenticator | None
    message: OutboundMessage
    tls_context: ssl.SSLContext | None = None


def _empty_call_list() -> list[TransportCall]:
    """Create an empty typed list for transport calls."""
    return []


@dataclass
class TransportSpy:
    """Captures transport operations for test assertions.

    Each test should create its own TransportSpy instance to avoid
    cross-test pollution.

    Attributes:
        calls: Every recorded transport invocation in order.
        raise_exception: When set, each send records the call and then
            raises this exception.
        timeouts: Timeouts requested through :meth:`create_transport`.

    Example:
        >>> from mailnotify.domain.message import build_message
        >>> spy = TransportSpy()
        >>> spy.send("smtp.test.com:25", None, build_message(["b@x.com"], "a@x.com", "Hi", "x", False))
        >>> spy.calls[0].path
        'plain'
    """

    calls: list[TransportCall] = field(default_factory=_empty_call_list)
    raise_exception: BaseException | None = None
    timeouts: list[float | None] = field(default_factory=list)

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.calls.clear()
        self.timeouts.clear()
        self.raise_exception = None

    def _record(self, call: TransportCall) -> None:
        self.calls.append(call)
        if self.raise_exception is not None:
            raise self.raise_exception

    def send(self, host_addr: str, auth: Authenticator | None, message: OutboundMessage) -> None:
        self._record(TransportCall("plain", host_addr, auth, message))

    def send_with_tls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        self._record(TransportCall("tls", host_addr, auth, message, tls_context))

    def send_with_starttls(
        self,
        host_addr: str,
        auth: Authenticator | None,
        message: OutboundMessage,
        tls_context: ssl.SSLContext | None,
    ) -> None:
        self._record(TransportCall("starttls", host_addr, auth, message, tls_context))

    def create_transport(self, *, timeout: float | None = None) -> TransportSpy:
        """Hand out this spy as the transport; satisfies ``CreateTransport``."""
        self.timeouts.append(timeout)
        return self


def load_mailer_settings_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> MailerSettings:
    """Parse mailer settings from dict using the real Pydantic model."""
    email_raw = config_dict.get("email", {})
    return MailerSettings.model_validate(email_raw if email_raw else {})


__all__ = [
    "TransportCall",
    "TransportSpy",
    "load_mailer_settings_from_dict_in_memory",
]
