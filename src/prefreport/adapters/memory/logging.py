"""In-memory logging adapter for testing.

Provides a no-op logging initializer that satisfies the InitLogging protocol.
Commands still open ``lib_log_rich.runtime.bind`` scopes, so CLI tests that
invoke commands wire the production initializer instead.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """No-op -- leaves the lib_log_rich runtime untouched."""


__all__ = ["init_logging_in_memory"]
