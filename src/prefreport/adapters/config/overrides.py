"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config.

Lets a single run tweak report options without editing a config file, e.g.
``--set report.output_dir=out`` or
``--set 'report.secure_preferences=["ApiSecret","SmtpPassword"]'``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Split ``SECTION.KEY[.SUBKEY...]=VALUE`` into a ConfigOverride.

    The first ``=`` ends the dotted path; everything after it is the value.

    Raises:
        ValueError: If ``=`` is missing, the path has no dot, or a path
            component is empty.

    Examples:
        >>> override = parse_override("report.output_dir=reports")
        >>> override.section, override.key_path, override.value
        ('report', ('output_dir',), 'reports')

        >>> parse_override("report.layout.column_widths.6=80").key_path
        ('layout', 'column_widths', '6')
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    path_part, value_str = raw.split("=", maxsplit=1)
    if "." not in path_part:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_parts = path_part.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_parts):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=tuple(key_parts), value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret ``raw`` as JSON where possible, else keep it as a string.

    Examples:
        >>> coerce_value("true"), coerce_value("12"), coerce_value("1.5")
        (True, 12, 1.5)
        >>> coerce_value('["ApiSecret"]')
        ['ApiSecret']
        >>> coerce_value("reports/nightly")
        'reports/nightly'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Write ``override`` into the nested dict ``target``, creating tables on the way.

    Raises:
        TypeError: If an intermediate key already holds a non-table value.
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge ``--set`` overrides into ``config``.

    Returns the original object unchanged when there is nothing to apply.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"report": {"output_dir": "."}}, {})
        >>> apply_overrides(cfg, ("report.output_dir=out",))["report"]["output_dir"]
        'out'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
