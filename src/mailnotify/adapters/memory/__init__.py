"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.transport` - In-memory mail transport (TransportSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .logging import init_logging_in_memory
from .transport import (
    TransportCall,
    TransportSpy,
    load_mailer_settings_from_dict_in_memory,
)

# Static conformance assertions
if TYPE_CHECKING:
    from mailnotify.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadMailerSettingsFromDict,
        MailTransport,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_mailer_settings: LoadMailerSettingsFromDict = load_mailer_settings_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport: MailTransport = TransportSpy()

__all__ = [
    "TransportCall",
    "TransportSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_mailer_settings_from_dict_in_memory",
]
