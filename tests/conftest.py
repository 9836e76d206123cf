"""Shared pytest fixtures for CLI, site export, and report tests.

Centralizes test infrastructure following clean architecture principles:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any
from xml.sax.saxutils import escape, quoteattr

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from prefreport.adapters.memory.report import ReportSpy
    from prefreport.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

METADATA_NAMESPACE = "http://www.demandware.com/xml/impex/metadata/2006-10-31"
PREFERENCES_NAMESPACE = "http://www.demandware.com/xml/impex/preferences/2007-03-31"

PreferenceValues = Mapping[str, "str | Sequence[str]"]


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


# ======================== Site export builder ========================


@dataclass
class SiteExportBuilder:
    """Writes a site export folder of XML documents under ``root``.

    Example:
        def test_scan(site_export: SiteExportBuilder) -> None:
            site_export.metadata(groups={"standard": ["ActiveLocales"]})
            site_export.preferences({"all-instances": {"ActiveLocales": "en"}})
            matrix = build_catalog(site_export.root)
    """

    root: Path

    def raw(self, relative: str, text: str) -> Path:
        """Write ``text`` verbatim to ``root / relative``."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def metadata(
        self,
        *,
        groups: Mapping[str, Sequence[str]] | None = None,
        display_names: Mapping[str, str] | None = None,
        ungrouped: Sequence[str] = (),
        type_id: str = "OrganizationPreferences",
        filename: str = "system-objecttype-extensions.xml",
    ) -> Path:
        """Write one metadata document declaring a single type extension."""
        names = dict(display_names or {})
        definitions = [*names, *(key for key in ungrouped if key not in names)]
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<metadata xmlns="{METADATA_NAMESPACE}">',
            f"  <type-extension type-id={quoteattr(type_id)}>",
        ]
        if definitions:
            lines.append("    <custom-attribute-definitions>")
            for key in definitions:
                lines.append(f"      <attribute-definition attribute-id={quoteattr(key)}>")
                if names.get(key):
                    lines.append(f'        <display-name xml:lang="x-default">{escape(names[key])}</display-name>')
                lines.append("      </attribute-definition>")
            lines.append("    </custom-attribute-definitions>")
        if groups:
            lines.append("    <group-definitions>")
            for group_id, keys in groups.items():
                lines.append(f"      <attribute-group group-id={quoteattr(group_id)}>")
                lines.extend(f"        <attribute attribute-id={quoteattr(key)}/>" for key in keys)
                lines.append("      </attribute-group>")
            lines.append("    </group-definitions>")
        lines += ["  </type-extension>", "</metadata>", ""]
        return self.raw(f"meta/{filename}", "\n".join(lines))

    def preferences(
        self,
        tiers: Mapping[str, PreferenceValues],
        *,
        site: str | None = None,
        section: str = "custom-preferences",
    ) -> Path:
        """Write a preference value document; ``site=None`` writes the global file.

        ``tiers`` maps tier element names (``all-instances``, ``development``,
        ...) to ``{preference-id: value}``; list values become ``<value>`` entries.
        """
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<preferences xmlns="{PREFERENCES_NAMESPACE}">',
            f"  <{section}>",
        ]
        for tier, values in tiers.items():
            lines.append(f"    <{tier}>")
            for key, value in values.items():
                if isinstance(value, str):
                    lines.append(f"      <preference preference-id={quoteattr(key)}>{escape(value)}</preference>")
                else:
                    entries = "".join(f"<value>{escape(entry)}</value>" for entry in value)
                    lines.append(f"      <preference preference-id={quoteattr(key)}>{entries}</preference>")
            lines.append(f"    </{tier}>")
        lines += [f"  </{section}>", "</preferences>", ""]
        relative = "preferences.xml" if site is None else f"sites/{site}/preferences.xml"
        return self.raw(relative, "\n".join(lines))


@pytest.fixture
def site_export(tmp_path: Path) -> SiteExportBuilder:
    """Provide an empty site export folder with XML writing helpers."""
    root = tmp_path / "site_export"
    root.mkdir()
    return SiteExportBuilder(root)


@pytest.fixture
def active_locales_export(site_export: SiteExportBuilder) -> SiteExportBuilder:
    """A small export: one grouped preference with baseline and development values.

    Staging and production sections are absent.
    """
    site_export.metadata(groups={"standard": ["ActiveLocales"]})
    site_export.preferences(
        {
            "all-instances": {"ActiveLocales": ["en", "en_GB"]},
            "development": {"ActiveLocales": "en"},
        }
    )
    return site_export


# ======================== CLI fixtures ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g., JSON parsing) so log lines
    written to stderr do not contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from prefreport.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
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

    Only clears before, not after, because a test may monkeypatch the
    function and lose ``cache_clear``.
    """
    from prefreport.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


def _services_with_config(config: Config, **replacements: Any) -> AppServices:
    """Production services with ``get_config`` returning ``config``."""
    from dataclasses import replace

    from prefreport.composition import build_production

    def _fake_get_config(**_kwargs: Any) -> Config:
        return config

    return replace(build_production(), get_config=_fake_get_config, **replacements)


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with an injected Config.

    Only the I/O boundary (``get_config``) is replaced, so report files are
    really written; point ``report.output_dir`` at ``tmp_path``.
    """

    def _inject(config: Config) -> Callable[[], AppServices]:
        services = _services_with_config(config)
        return lambda: services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose ``get_config`` records the profile it was asked for."""
    from dataclasses import replace

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = replace(_services_with_config(config), get_config=_capturing_get_config)
        return lambda: services

    return _inject


@dataclass
class ReportCliContext:
    """Services factory and report spy for CLI tests that must not write files.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: ReportSpy capturing every write request.
    """

    factory: Callable[[], Any]
    spy: ReportSpy


@pytest.fixture
def report_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], ReportCliContext]:
    """Create a CLI test context whose report writes are captured in memory.

    Takes the full config dict (e.g. ``{"report": {...}}``); logging uses the
    production initializer so ``lib_log_rich.runtime.bind`` works.

    Example:
        def test_analyze(cli_runner, report_cli_context, active_locales_export) -> None:
            ctx = report_cli_context({"report": {"output_dir": "out"}})
            result = cli_runner.invoke(
                cli, ["analyze", "--yes", "--folder", str(active_locales_export.root)], obj=ctx.factory
            )
            assert ctx.spy.last.base_name == "code-base"
    """
    from prefreport.adapters.memory.report import ReportSpy as ReportSpyImpl

    def _create(config_data: dict[str, Any]) -> ReportCliContext:
        spy = ReportSpyImpl()
        services = _services_with_config(Config(config_data, {}), write_reports=spy.write_reports)
        return ReportCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory from a plain config dict.

    Simpler than ``inject_config`` when you don't need a pre-built Config object.
    """

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        services = _services_with_config(Config(config_data, {}))
        return lambda: services

    return _create
