"""``send`` command delivering one notification through the configured mailer.

Settings come from the ``[email]`` configuration section; command-line
options override them and go through the same validation.
"""

from __future__ import annotations

import logging
import os
from typing import Any, NoReturn, cast

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from mailnotify import __init__conf__
from mailnotify.adapters.smtp.settings import MailerSettings, build_mailer
from mailnotify.domain.enums import AuthScheme, BodyFormat, TransportKind
from mailnotify.domain.errors import ConfigurationError, DeliveryError

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options (``None`` and ``()``) and turn tuples into lists.

    Example:
        >>> filter_sentinels(receivers=("a@x.com",), smtp_host=None, auth=())
        {'receivers': ['a@x.com']}
    """
    result: dict[str, Any] = {}
    for k, v in kwargs.items():
        if v is None or v == ():
            continue
        if isinstance(v, tuple):
            result[k] = list(cast(tuple[Any, ...], v))
        else:
            result[k] = v
    return result


def apply_validated_overrides(base: MailerSettings, overrides: dict[str, Any]) -> MailerSettings:
    """Merge ``overrides`` into ``base`` and validate the result.

    ``model_validate`` on the merged dump is used instead of
    ``model_copy(update=...)`` so validators run on overridden values.

    Raises:
        ValidationError: When an override is invalid.
    """
    if not overrides:
        return base
    merged = {**base.model_dump(), **overrides}
    return MailerSettings.model_validate(merged)


def _fail(
    exc: BaseException,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(log_message, extra={"error": str(exc), "error_type": type(exc).__name__}, exc_info=log_traceback)
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code) from exc


def _resolve_settings(cli_ctx: CLIContext, overrides: dict[str, Any]) -> MailerSettings:
    try:
        settings = cli_ctx.services.load_mailer_settings_from_dict(cli_ctx.config.as_dict())
        return apply_validated_overrides(settings, overrides)
    except ValidationError as exc:
        _fail(exc, "Invalid mail settings", "Invalid option value", exit_code=ExitCode.INVALID_ARGUMENT)


def _deliver(cli_ctx: CLIContext, settings: MailerSettings, subject: str, message: str) -> None:
    """Build the mailer and send, mapping failures onto exit codes.

    Raises:
        SystemExit: ``CONFIG_ERROR`` for incomplete settings, ``SMTP_FAILURE``
            when delivery fails, ``GENERAL_ERROR`` for anything unexpected.
    """
    try:
        transport = cli_ctx.services.create_transport(timeout=settings.timeout)
        mailer = build_mailer(settings, transport=transport)
        mailer.send(subject, message)
    except ConfigurationError as exc:
        click.echo(f"See: {__init__conf__.shell_command} config --section email", err=True)
        _fail(exc, "Mail configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)
    except DeliveryError as exc:
        _fail(exc, "SMTP delivery failed", "Failed to send mail", exit_code=ExitCode.SMTP_FAILURE)
    except Exception as exc:
        # DEVELOPMENT_MODE surfaces unexpected bugs with their full traceback
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(
            exc,
            "Unexpected error sending mail",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--subject", required=True, help="Subject line")
@click.option("--message", required=True, help="Message body")
@click.option(
    "--to",
    "receivers",
    multiple=True,
    default=(),
    help="Receiver address (repeatable; replaces email.receivers when given)",
)
@click.option("--from", "sender_address", default=None, help="Override the sender address")
@click.option("--smtp-host", default=None, help="Override the SMTP server (host:port)")
@click.option(
    "--plain-text/--html",
    "plain_text",
    default=None,
    help="Send the body as plain text or HTML (default from email.body_format)",
)
@click.option(
    "--transport",
    type=click.Choice([t.value for t in TransportKind], case_sensitive=False),
    default=None,
    help="Connection security: plain, implicit tls or starttls",
)
@click.option(
    "--auth",
    type=click.Choice([a.value for a in AuthScheme], case_sensitive=False),
    default=None,
    help="Authentication scheme",
)
@click.option("--smtp-username", default=None, help="Override the SMTP username")
@click.option("--smtp-password", default=None, help="Override the SMTP password")
@click.pass_context
def cli_send(
    ctx: click.Context,
    subject: str,
    message: str,
    receivers: tuple[str, ...],
    sender_address: str | None,
    smtp_host: str | None,
    plain_text: bool | None,
    transport: str | None,
    auth: str | None,
    smtp_username: str | None,
    smtp_password: str | None,
) -> None:
    """Send a notification mail to the configured or given receivers."""
    cli_ctx = get_cli_context(ctx)
    body_format = None if plain_text is None else (BodyFormat.PLAIN_TEXT if plain_text else BodyFormat.HTML)
    overrides = filter_sentinels(
        receivers=receivers,
        sender_address=sender_address,
        smtp_host=smtp_host,
        body_format=body_format,
        transport=transport.lower() if transport else None,
        auth=auth.lower() if auth else None,
        smtp_username=smtp_username,
        smtp_password=smtp_password,
    )

    extra = {"command": "send", "subject": subject, "receivers": list(receivers) or None}
    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        settings = _resolve_settings(cli_ctx, overrides)
        _deliver(cli_ctx, settings, subject, message)
        click.echo("\nMail sent successfully!")
        logger.info("Mail sent via CLI", extra={"receivers": settings.receivers})


__all__ = ["apply_validated_overrides", "cli_send", "filter_sentinels"]
