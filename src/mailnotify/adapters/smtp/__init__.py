"""SMTP adapter - smtplib transport and typed mailer settings.

Structure:
    * :mod:`.settings` - MailerSettings model, loader and mailer factory
    * :mod:`.transport` - smtplib-backed MailTransport

Contents:
    * :class:`.settings.MailerSettings` - Mailer configuration container
    * :func:`.settings.load_mailer_settings_from_dict` - Config dict loader
    * :func:`.settings.build_mailer` - Settings to Mailer factory
    * :class:`.transport.SmtplibTransport` - Production transport
    * :func:`.transport.create_smtp_transport` - Transport factory for the CLI
"""

from __future__ import annotations

from .settings import MailerSettings, build_mailer, load_mailer_settings_from_dict
from .transport import SmtplibTransport, create_smtp_transport

__all__ = [
    "MailerSettings",
    "SmtplibTransport",
    "build_mailer",
    "create_smtp_transport",
    "load_mailer_settings_from_dict",
]
