"""Shared pytest fixtures for mailer, CLI and module-entry tests.

All shared fixtures live here; tests pick them up through pytest's conftest
discovery. Fixture names read as plain English.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from mailnotify.adapters.memory import TransportSpy
from mailnotify.application.mailer import Mailer

if TYPE_CHECKING:
    from mailnotify.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== Mailer fixtures ========================


@pytest.fixture
def transport_spy() -> TransportSpy:
    """Provide a fresh TransportSpy that records every send."""
    return TransportSpy()


@pytest.fixture
def mailer(transport_spy: TransportSpy) -> Mailer:
    """Provide a Mailer wired to ``transport_spy`` with one receiver.

    Example:
        def test_send(mailer: Mailer, transport_spy: TransportSpy) -> None:
            mailer.send("Subject", "Body")
            assert transport_spy.calls[0].path == "plain"
    """
    instance = Mailer("sender@example.com", "smtp.example.com:587", transport=transport_spy)
    instance.add_receivers("receiver@example.com")
    return instance


# ======================== CLI fixtures ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output; log lines go to stderr.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for CLI invocations."""
    from mailnotify.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Only clears before, not after, so a monkeypatched ``get_config``
    without ``cache_clear`` does not break teardown.
    """
    from mailnotify.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O.

    Example:
        def test_email_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"email": {"smtp_host": "smtp.test.com:587"}})
            assert config.get("email.smtp_host") == "smtp.test.com:587"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@dataclass
class MailerCliContext:
    """Services factory and transport spy for CLI ``send`` tests.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        spy: TransportSpy capturing what the mailer handed to the transport.
        profiles: Profile names the root command requested from get_config.
    """

    factory: Callable[[], Any]
    spy: TransportSpy
    profiles: list[str | None]


@pytest.fixture
def mailer_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], MailerCliContext]:
    """Create a CLI test context whose ``[email]`` section is ``email_data``.

    Only the I/O boundaries are replaced: configuration comes from memory
    and the SMTP transport is a spy. Logging and settings parsing are real.

    Example:
        def test_send(cli_runner: CliRunner, mailer_cli_context) -> None:
            ctx = mailer_cli_context({"smtp_host": "smtp.test.com:587", "sender_address": "a@test.com"})
            result = cli_runner.invoke(cli, ["send", "--subject", "Hi", "--message", "x"], obj=ctx.factory)
            assert ctx.spy.calls[0].message.subject == "Hi"
    """
    from mailnotify.composition import AppServices, build_production

    def _create(email_data: dict[str, Any]) -> MailerCliContext:
        spy = TransportSpy()
        profiles: list[str | None] = []
        config = Config({"email": email_data}, {})
        prod = build_production()

        def _fake_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            profiles.append(profile)
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            load_mailer_settings_from_dict=prod.load_mailer_settings_from_dict,
            create_transport=spy.create_transport,
            init_logging=prod.init_logging,
        )
        return MailerCliContext(factory=lambda: test_services, spy=spy, profiles=profiles)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory that serves ``config_data`` as configuration."""
    from mailnotify.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            get_default_config_path=prod.get_default_config_path,
            display_config=prod.display_config,
            load_mailer_settings_from_dict=prod.load_mailer_settings_from_dict,
            create_transport=prod.create_transport,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create
