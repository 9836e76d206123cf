"""Logging initialisation shared by every entry point.

The ``[lib_log_rich]`` configuration section drives a single lib_log_rich
runtime per process; stdlib ``logging`` records (used throughout the
analysis modules) are bridged into it.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from prefreport import __init__conf__


class LoggingConfigModel(BaseModel):
    """Boundary model for the ``[lib_log_rich]`` section.

    Unknown keys pass through untouched to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> LoggingConfigModel(environment="ci").environment
        'ci'
        >>> LoggingConfigModel().service is None
        True
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Translate the ``[lib_log_rich]`` section into a RuntimeConfig.

    ``service`` falls back to the distribution name.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialise the lib_log_rich runtime once and attach stdlib logging.

    Later calls are no-ops, so every command can call this unconditionally.
    ``.env`` files are enabled first so ``LOG_*`` variables defined there
    take effect.

    Args:
        config: Loaded layered configuration holding the ``[lib_log_rich]`` section.
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
