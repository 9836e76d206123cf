"""CLI entry point and execution wrapper.

Contents:
    * :func:`main` - Primary entry point for console script and ``python -m`` runs.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import lib_log_rich.runtime
import rich_click as click

from prefreport import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from prefreport.composition import AppServices


def _report_unhandled(exc: BaseException) -> int:
    """Print ``exc`` via lib_cli_exit_tools and return its exit code."""
    tracebacks_enabled = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(tracebacks_enabled)
    length_limit = TRACEBACK_VERBOSE_LIMIT if tracebacks_enabled else TRACEBACK_SUMMARY_LIMIT
    lib_cli_exit_tools.print_exception_message(trace_back=tracebacks_enabled, length_limit=length_limit)
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the root group with the services factory as ``ctx.obj``.

    ``lib_cli_exit_tools.run_cli`` cannot pass ``obj``, so its handling is
    replicated here.
    """
    from .root import cli

    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(
            args=args,
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
        return 0
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # noqa: BLE001 - CLI boundary formats everything, SystemExit included
        return _report_unhandled(exc)


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``prefreport`` and return the exit code.

    Args:
        argv: CLI arguments; ``None`` reads ``sys.argv``.
        restore_traceback: Restore the prior traceback configuration afterwards.
        services_factory: Factory returning AppServices; callers outside the
            adapters layer pass ``build_production``.

    Raises:
        ValueError: If services_factory is not provided.

    Example:
        >>> from prefreport.composition import build_production
        >>> main(["--help"], services_factory=build_production)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # shutting down from a worker thread would kill logging for the main one
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]
