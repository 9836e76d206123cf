"""CLI core stories: traceback handling, main entry, help, info, unknown command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner, Result

from prefreport import __init__conf__
from prefreport.adapters import cli as cli_mod
from prefreport.composition import AppServices, build_production
from prefreport.domain.matrix import PreferenceMatrix


def _exploding_services() -> AppServices:
    """Production services whose catalog step fails unexpectedly."""

    def _explode(folder: Path) -> PreferenceMatrix:
        raise RuntimeError("catalog exploded")

    return replace(build_production(), build_catalog=_explode)


@pytest.mark.os_agnostic
def test_snapshot_traceback_state_returns_disabled_by_default(managed_traceback_state: None) -> None:
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_apply_traceback_preferences_enables_both_flags(managed_traceback_state: None) -> None:
    cli_mod.apply_traceback_preferences(True)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


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
def test_traceback_flags_restored_after_info_command(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    monkeypatch.setattr(__init__conf__, "print_info", lambda: None)

    cli_mod.main(["--traceback", "info"], services_factory=build_production)

    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.os_agnostic
def test_restore_traceback_false_keeps_flags_enabled(managed_traceback_state: None) -> None:
    cli_mod.apply_traceback_preferences(False)

    cli_mod.main(["--traceback", "info"], restore_traceback=False, services_factory=build_production)

    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


@pytest.mark.os_agnostic
def test_main_without_services_factory_is_rejected() -> None:
    with pytest.raises(ValueError, match="services_factory is required"):
        cli_mod.main(["info"])


@pytest.mark.os_agnostic
def test_main_runs_info_with_production_services(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    result = cli_mod.main(["info"], services_factory=build_production)

    assert result == 0
    assert __init__conf__.name in capsys.readouterr().out


@pytest.mark.os_agnostic
def test_when_cli_runs_without_arguments_help_is_printed(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result = cli_runner.invoke(cli_mod.cli, [], obj=production_factory)

    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "analyze" in result.output


@pytest.mark.os_agnostic
def test_version_option_prints_shell_command_and_version(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result = cli_runner.invoke(cli_mod.cli, ["--version"], obj=production_factory)

    assert result.exit_code == 0
    assert f"{__init__conf__.shell_command} version {__init__conf__.version}" in result.output


@pytest.mark.os_agnostic
def test_traceback_flag_displays_full_exception_traceback(
    managed_traceback_state: None,
    active_locales_export: Any,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    """--traceback prints the complete traceback for an unexpected failure."""
    exit_code = cli_mod.main(
        ["--traceback", "analyze", "--yes", "--folder", str(active_locales_export.root)],
        services_factory=_exploding_services,
    )

    plain_err = strip_ansi(capsys.readouterr().err)

    assert exit_code != 0
    assert "Traceback (most recent call last)" in plain_err
    assert "RuntimeError: catalog exploded" in plain_err
    assert lib_cli_exit_tools.config.traceback is False


@pytest.mark.os_agnostic
def test_unexpected_error_without_traceback_prints_summary_only(
    managed_traceback_state: None,
    active_locales_export: Any,
    capsys: pytest.CaptureFixture[str],
    strip_ansi: Callable[[str], str],
) -> None:
    exit_code = cli_mod.main(
        ["analyze", "--yes", "--folder", str(active_locales_export.root)],
        services_factory=_exploding_services,
    )

    plain_err = strip_ansi(capsys.readouterr().err)

    assert exit_code != 0
    assert "catalog exploded" in plain_err
    assert "Traceback (most recent call last)" not in plain_err


@pytest.mark.os_agnostic
def test_info_command_displays_project_metadata(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["info"], obj=production_factory)

    assert result.exit_code == 0
    assert f"Info for {__init__conf__.name}:" in result.output
    assert __init__conf__.version in result.output


@pytest.mark.os_agnostic
def test_unknown_command_shows_no_such_command_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["does-not-exist"], obj=production_factory)

    assert result.exit_code != 0
    assert "No such command" in result.output
