"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config

# Configuration services
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# SMTP services
from ..adapters.smtp.settings import load_mailer_settings_from_dict
from ..adapters.smtp.transport import SmtplibTransport, create_smtp_transport
from ..application.mailer import Mailer

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.transport import TransportSpy
    from ..application.ports import (
        CreateTransport,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailerSettingsFromDict,
        MailTransport,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_load_mailer_settings_from_dict: LoadMailerSettingsFromDict = load_mailer_settings_from_dict
    _assert_create_transport: CreateTransport = create_smtp_transport
    _assert_transport: MailTransport = SmtplibTransport()
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    load_mailer_settings_from_dict: LoadMailerSettingsFromDict
    create_transport: CreateTransport
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        load_mailer_settings_from_dict=load_mailer_settings_from_dict,
        create_transport=create_smtp_transport,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransportSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional TransportSpy for capturing send operations. When None,
            a fresh TransportSpy is created. Pass your own spy to assert on
            captured calls in tests.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        TransportSpy,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_mailer_settings_from_dict_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        load_mailer_settings_from_dict=load_mailer_settings_from_dict_in_memory,
        create_transport=transport_spy.create_transport,
        init_logging=init_logging_in_memory,
    )


def new_mailer(sender_address: str, smtp_host_addr: str) -> Mailer:
    """Create a Mailer wired to the production smtplib transport.

    No address or reachability checks happen here; malformed values
    surface as a DeliveryError on the first send.

    Example:
        >>> mailer = new_mailer("a@x.com", "smtp.example.com:587")
        >>> mailer.receiver_addresses
        ()
    """
    return Mailer(sender_address, smtp_host_addr, transport=SmtplibTransport())


__all__ = [
    # Configuration
    "display_config",
    "get_config",
    "get_default_config_path",
    # SMTP
    "create_smtp_transport",
    "load_mailer_settings_from_dict",
    "new_mailer",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
