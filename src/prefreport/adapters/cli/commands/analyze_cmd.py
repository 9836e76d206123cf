"""Site export analysis command.

Resolves the export folder and report name, runs the analysis use case, and
writes the JSON, CSV and spreadsheet reports.

Exception handling, most specific first:

1. ConfigurationError -> CONFIG_ERROR (78): invalid ``[report]`` settings
2. missing folder -> FILE_NOT_FOUND (2)
3. unusable report name -> INVALID_ARGUMENT (22)
4. ReportWriteError -> CANNOT_CREATE (73): one or more artifacts not written

Contents:
    * :func:`cli_analyze` - Analyze a site export and write the reports.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import lib_log_rich.runtime
import rich_click as click

from prefreport.adapters.config.settings import ReportSettings, validate_report_name
from prefreport.application.analysis import analyze_site_export
from prefreport.application.inputs import resolve_value
from prefreport.domain.errors import ConfigurationError, ReportWriteError
from prefreport.domain.report import PreferenceReport

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def _fail(message: str, exit_code: ExitCode, **extra: object) -> NoReturn:
    logger.error(message, extra=extra)
    click.echo(f"\nError: {message}", err=True)
    raise SystemExit(exit_code)


def _load_settings(cli_ctx: CLIContext) -> ReportSettings:
    try:
        return cli_ctx.report_settings()
    except ConfigurationError as exc:
        _fail(str(exc), ExitCode.CONFIG_ERROR)


def _prompt_folder(default: Path) -> Path:
    return Path(click.prompt("Site export folder", default=str(default)))


def _prompt_name(default: str) -> str:
    return str(click.prompt("Report name", default=default))


def _write(cli_ctx: CLIContext, report: PreferenceReport, output_dir: Path, name: str) -> list[Path]:
    try:
        return cli_ctx.services.write_reports(report, output_dir=output_dir, base_name=name)
    except ReportWriteError as exc:
        for path in exc.written:
            click.echo(f"  ✓ {path}")
        for path, message in exc.failures.items():
            click.echo(f"  ✗ {path}: {message}", err=True)
        _fail(
            f"{len(exc.failures)} report file(s) could not be written",
            ExitCode.CANNOT_CREATE,
            failures={str(path): message for path, message in exc.failures.items()},
        )


@click.command("analyze", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--folder",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Site export folder to analyze (prompted for when omitted; default: report.default_folder)",
)
@click.option(
    "--name",
    type=str,
    default=None,
    help="Report name used in the output file names (prompted for when omitted; default: report.default_name)",
)
@click.option(
    "--yes",
    "-y",
    "assume_defaults",
    is_flag=True,
    default=False,
    help="Do not prompt; use the configured defaults for omitted values",
)
@click.pass_context
def cli_analyze(ctx: click.Context, folder: Path | None, name: str | None, assume_defaults: bool) -> None:
    r"""Analyze a site export and write report-<name>.json, .csv and .xlsx.

    \b
    Values are taken from, in order:
    - the --folder / --name options
    - an interactive prompt (skipped with --yes)
    - report.default_folder / report.default_name

    Reports are written to report.output_dir.
    """
    cli_ctx = get_cli_context(ctx)
    settings = _load_settings(cli_ctx)

    resolved_folder = resolve_value(folder, settings.default_folder, None if assume_defaults else _prompt_folder)
    resolved_name = resolve_value(name, settings.default_name, None if assume_defaults else _prompt_name)

    extra = {"command": "analyze", "folder": str(resolved_folder), "name": resolved_name}
    with lib_log_rich.runtime.bind(job_id="cli-analyze", extra=extra):
        if not resolved_folder.is_dir():
            _fail(f"Site export folder not found: {resolved_folder}", ExitCode.FILE_NOT_FOUND, folder=str(resolved_folder))
        try:
            validate_report_name(resolved_name)
        except ValueError as exc:
            _fail(str(exc), ExitCode.INVALID_ARGUMENT, name=resolved_name)

        logger.info("Analyzing site export", extra={"output_dir": str(settings.output_dir)})
        report = analyze_site_export(
            resolved_folder,
            settings,
            build_catalog=cli_ctx.services.build_catalog,
            merge_environments=cli_ctx.services.merge_environments,
        )
        written = _write(cli_ctx, report, settings.output_dir, resolved_name)

        logger.info("Reports written", extra={"paths": [str(path) for path in written]})
        click.echo(f"\nAnalyzed {report.preference_count} preference(s) from {resolved_folder}:")
        for path in written:
            click.echo(f"  ✓ {path}")


__all__ = ["cli_analyze"]
