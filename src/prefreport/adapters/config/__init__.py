"""Configuration adapter - loading, display, overrides, and report settings.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
    * :mod:`.settings` - Validated ``[report]`` settings model
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides
from .settings import ReportSettings, load_report_settings_from_dict

__all__ = [
    "ReportSettings",
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
    "load_report_settings_from_dict",
]
