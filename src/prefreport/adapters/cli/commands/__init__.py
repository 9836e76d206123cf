"""CLI command implementations.

Contents:
    * Analysis command from :mod:`.analyze_cmd`
    * Config command from :mod:`.config`
    * Info command from :mod:`.info`
"""

from __future__ import annotations

from .analyze_cmd import cli_analyze
from .config import cli_config
from .info import cli_info

__all__ = [
    "cli_analyze",
    "cli_config",
    "cli_info",
]
