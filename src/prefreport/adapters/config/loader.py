"""Configuration loader with caching and profile support."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from prefreport import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Protocol for config loader with cache_clear method."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Validate a profile name using lib_layered_config.

    Args:
        profile: The profile name to validate.
        max_length: Optional maximum length. Defaults to DEFAULT_MAX_PROFILE_LENGTH.

    Raises:
        ValueError: If the profile name is empty, too long, contains path
            separators, or is otherwise unusable as a directory name.

    Examples:
        >>> validate_profile("staging-v2")

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    length = max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH
    validate_profile_name(profile, max_length=length)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path to the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One Config per (profile, start_dir) for the lifetime of the CLI process.
@lru_cache(maxsize=4)
def _get_config_impl(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load layered configuration with the bundled report defaults.

    Precedence, lowest to highest: defaults -> app -> host -> user -> dotenv -> env.
    Report options live in the ``[report]`` section (see ``defaultconfig.toml``);
    logging options in ``[lib_log_rich]``.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into every
            configuration path (e.g. ``~/.config/prefreport/profile/audit/config.toml``).
        start_dir: Directory that seeds ``.env`` discovery. Defaults to the
            current working directory.

    Returns:
        Immutable configuration object with provenance tracking.

    Example:
        >>> config = get_config()
        >>> config.get("report.default_name")
        'code-base'
    """
    if profile is not None:
        validate_profile(profile)
    return _get_config_impl(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Invalidate the cached configuration so the next call re-reads disk."""
    _get_config_impl.cache_clear()


# lru_cache's cache_clear is invisible to type checkers once the wrapper is
# cast to the Protocol, so it is attached explicitly.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "validate_profile",
    "get_config",
    "get_default_config_path",
]
