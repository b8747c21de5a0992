"""Mailer settings model, loader and mailer factory.

Provides the MailerSettings Pydantic model for validated, immutable SMTP
settings, the loader that creates it from configuration dictionaries, and
:func:`build_mailer` which turns settings into a configured Mailer.
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address, validate_smtp_host
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailnotify.application.mailer import Mailer
from mailnotify.application.ports import MailTransport
from mailnotify.domain.enums import AuthScheme, BodyFormat, TransportKind
from mailnotify.domain.errors import ConfigurationError, InvalidRecipientError

from .transport import split_host_port


class MailerSettings(BaseModel):
    """Validated, immutable mailer configuration.

    Example:
        >>> settings = MailerSettings(
        ...     smtp_host="smtp.example.com:587",
        ...     sender_address="noreply@example.com",
        ...     transport="starttls",
        ... )
        >>> settings.transport
        <TransportKind.STARTTLS: 'starttls'>
    """

    model_config = ConfigDict(frozen=True)

    sender_address: str | None = None
    smtp_host: str | None = None
    receivers: list[str] = Field(default_factory=list)
    body_format: BodyFormat = BodyFormat.HTML
    transport: TransportKind = TransportKind.PLAIN
    auth: AuthScheme = AuthScheme.NONE
    smtp_identity: str = ""
    smtp_username: str | None = None
    smtp_password: str | None = None
    tls_verify: bool = True
    timeout: float = 30.0

    @field_validator("receivers", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings to single-element lists.

        Handles environment variables and .env files that provide single strings
        instead of TOML arrays. Empty strings become empty lists.

        Examples:
            >>> MailerSettings._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> MailerSettings._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @field_validator("sender_address", "smtp_host", "smtp_username", "smtp_password", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only strings from config files as "not set"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_settings(self) -> MailerSettings:
        """Validate addresses, host and timeout.

        Raises:
            ValueError: When a value is malformed; receivers raise
                :class:`InvalidRecipientError`.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if self.sender_address is not None:
            validate_email_address(self.sender_address)

        for receiver in self.receivers:
            try:
                validate_email_address(receiver)
            except ValueError as exc:
                raise InvalidRecipientError(f"Invalid recipient: {receiver}") from exc

        if self.smtp_host is not None:
            validate_smtp_host(self.smtp_host)

        return self

    def __repr__(self) -> str:
        """Return string representation with smtp_password redacted.

        Example:
            >>> settings = MailerSettings(smtp_password="secret123")
            >>> "secret123" in repr(settings)
            False
            >>> "[REDACTED]" in repr(settings)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "smtp_password" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailerSettings({', '.join(fields)})"

    def tls_context(self) -> ssl.SSLContext | None:
        """Return TLS parameters for secured transports.

        ``None`` selects the verifying library default; with
        ``tls_verify`` off, certificate and host name checks are disabled.
        """
        if self.tls_verify:
            return None
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context


def load_mailer_settings_from_dict(config_dict: Mapping[str, Any]) -> MailerSettings:
    """Load MailerSettings from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailerSettings model, reading the ``[email]`` section.

    Example:
        >>> settings = load_mailer_settings_from_dict(
        ...     {"email": {"smtp_host": "smtp.example.com:465", "transport": "tls"}}
        ... )
        >>> settings.transport.value
        'tls'
        >>> load_mailer_settings_from_dict({}).body_format.value
        'html'
    """
    email_section: Any = config_dict.get("email", {})
    if not isinstance(email_section, Mapping):
        return MailerSettings.model_validate(email_section)
    email_raw = dict(cast(Mapping[str, Any], email_section))
    return MailerSettings.model_validate(email_raw)


def build_mailer(settings: MailerSettings, *, transport: MailTransport) -> Mailer:
    """Create a fully configured Mailer from validated settings.

    Raises:
        ConfigurationError: When the sender or host is missing, or when an
            auth scheme is selected without username and password.
    """
    if settings.sender_address is None:
        raise ConfigurationError("No sender address configured (email.sender_address is empty)")
    if settings.smtp_host is None:
        raise ConfigurationError("No SMTP host configured (email.smtp_host is empty)")

    mailer = Mailer(settings.sender_address, settings.smtp_host, transport=transport)
    mailer.add_receivers(*settings.receivers)
    mailer.set_body_format(settings.body_format)

    if settings.transport is TransportKind.STARTTLS:
        mailer.enable_starttls(settings.tls_context())
    elif settings.transport is TransportKind.TLS:
        mailer.enable_tls(settings.tls_context())

    if settings.auth is not AuthScheme.NONE:
        if settings.smtp_username is None or settings.smtp_password is None:
            raise ConfigurationError(
                f"Auth scheme {settings.auth.value!r} needs email.smtp_username and email.smtp_password"
            )
        if settings.auth is AuthScheme.LOGIN:
            mailer.set_login_auth(settings.smtp_username, settings.smtp_password)
        else:
            host, _ = split_host_port(settings.smtp_host)
            mailer.set_plain_auth(settings.smtp_identity, settings.smtp_username, settings.smtp_password, host)

    return mailer


__all__ = [
    "MailerSettings",
    "build_mailer",
    "load_mailer_settings_from_dict",
]
