"""CLI core stories: traceback state, main entry, help, version, info, unknown command."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner, Result

from mailnotify import __init__conf__
from mailnotify.adapters import cli as cli_mod
from mailnotify.adapters.cli.context import (
    CLIContext,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
)
from mailnotify.composition import build_production

if TYPE_CHECKING:
    from conftest import MailerCliContext

_SEND_ARGS = ["send", "--subject", "Hi", "--message", "body"]
_READY = {"sender_address": "sender@test.com", "smtp_host": "smtp.test.com:587", "receivers": ["r@test.com"]}


# ======================== Traceback state ========================


@pytest.mark.os_agnostic
def test_snapshot_traceback_state_returns_disabled_by_default(managed_traceback_state: None) -> None:
    """Both flags start disabled."""
    assert snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_apply_traceback_preferences_enables_both_flags(managed_traceback_state: None) -> None:
    """apply_traceback_preferences(True) enables traceback and force_color."""
    apply_traceback_preferences(True)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_restore_traceback_state_resets_flags_to_previous(managed_traceback_state: None) -> None:
    """restore_traceback_state undoes apply_traceback_preferences."""
    previous = snapshot_traceback_state()
    apply_traceback_preferences(True)

    restore_traceback_state(previous)

    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.os_agnostic
def test_get_cli_context_without_root_command_fails() -> None:
    """Subcommands cannot run before the root command stored its state."""
    from unittest.mock import MagicMock

    ctx = MagicMock()
    ctx.obj = None

    with pytest.raises(RuntimeError, match="not initialized"):
        get_cli_context(ctx)


@pytest.mark.os_agnostic
def test_get_cli_context_returns_stored_state() -> None:
    """The typed state stored by the root command is returned as-is."""
    from unittest.mock import MagicMock

    ctx = MagicMock()
    ctx.obj = CLIContext(traceback=False, config=MagicMock(), services=MagicMock(), profile="test")

    assert get_cli_context(ctx).profile == "test"


@pytest.mark.os_agnostic
def test_traceback_flag_is_active_during_info_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    """--traceback enables both flags while the command runs."""
    notes: list[tuple[bool, bool]] = []

    def record() -> None:
        notes.append((lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color))

    monkeypatch.setattr(__init__conf__, "print_info", record)

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_production)

    assert exit_code == 0
    assert notes == [(True, True)]


@pytest.mark.os_agnostic
def test_traceback_flags_restored_after_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    """Flags return to disabled once main() finishes."""
    monkeypatch.setattr(__init__conf__, "print_info", lambda: None)

    cli_mod.main(["--traceback", "info"], services_factory=build_production)

    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.os_agnostic
def test_restore_traceback_false_keeps_flags_enabled(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    """restore_traceback=False leaves the --traceback preference in place."""
    monkeypatch.setattr(__init__conf__, "print_info", lambda: None)

    cli_mod.main(["--traceback", "info"], restore_traceback=False, services_factory=build_production)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_traceback_flag_prints_full_traceback_for_unexpected_errors(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
    mailer_cli_context: Callable[[dict[str, Any]], MailerCliContext],
) -> None:
    """With --traceback an escaping exception is printed in full."""
    monkeypatch.setenv("DEVELOPMENT_MODE", "1")
    ctx = mailer_cli_context(_READY)
    ctx.spy.raise_exception = TypeError("transport bug")

    exit_code = cli_mod.main(["--traceback", *_SEND_ARGS], services_factory=ctx.factory)

    plain_err = strip_ansi(capsys.readouterr().err)
    assert exit_code != 0
    assert "Traceback (most recent call last)" in plain_err
    assert "transport bug" in plain_err


# ======================== main() ========================


@pytest.mark.os_agnostic
def test_main_requires_a_services_factory() -> None:
    """The adapters layer never wires production services by itself."""
    with pytest.raises(ValueError, match="services_factory is required"):
        cli_mod.main(["info"])


@pytest.mark.os_agnostic
def test_main_runs_info_with_services_factory(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """main() invokes the CLI with the factory passed through ctx.obj."""
    result = cli_mod.main(["info"], services_factory=build_production)

    assert result == 0
    assert __init__conf__.name in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_main_returns_command_exit_code(
    managed_traceback_state: None,
    mailer_cli_context: Callable[[dict[str, Any]], MailerCliContext],
) -> None:
    """Exit codes raised by commands become main()'s return value."""
    ctx = mailer_cli_context({})

    assert cli_mod.main(_SEND_ARGS, services_factory=ctx.factory) == 78


# ======================== Root group ========================


@pytest.mark.os_agnostic
def test_when_cli_runs_without_arguments_help_is_printed(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """No subcommand shows the help text."""
    result: Result = cli_runner.invoke(cli_mod.cli, [], obj=production_factory)

    assert result.exit_code == 0
    assert "Usage:" in result.output


@pytest.mark.os_agnostic
def test_version_option_prints_version(cli_runner: CliRunner, production_factory: Callable[[], Any]) -> None:
    """--version prints the shell command and version."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["--version"], obj=production_factory)

    assert result.exit_code == 0
    assert f"{__init__conf__.shell_command} version {__init__conf__.version}" in result.output


@pytest.mark.os_agnostic
def test_info_command_displays_project_metadata(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """info prints the package name and version."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["info"], obj=production_factory)

    assert result.exit_code == 0
    assert f"Info for {__init__conf__.name}:" in result.output
    assert __init__conf__.version in result.output


@pytest.mark.os_agnostic
def test_unknown_command_shows_no_such_command_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """Unknown subcommands are rejected by Click."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["does-not-exist"], obj=production_factory)

    assert result.exit_code != 0
    assert "No such command" in result.output


@pytest.mark.os_agnostic
def test_cli_facade_exports_registered_commands() -> None:
    """The CLI package exports every registered command."""
    assert set(cli_mod.cli.commands) == {"info", "config", "send"}
    assert {"cli_info", "cli_config", "cli_send"} <= set(dir(cli_mod))


@pytest.mark.os_agnostic
def test_exit_codes_follow_sysexits() -> None:
    """Exit codes used by the CLI keep their conventional values."""
    assert int(cli_mod.ExitCode.INVALID_ARGUMENT) == 22
    assert int(cli_mod.ExitCode.SMTP_FAILURE) == 69
    assert int(cli_mod.ExitCode.CONFIG_ERROR) == 78
    assert int(cli_mod.ExitCode.SIGNAL_INT) == 130
