"""Resolve run inputs from flags, interactive answers, and configured defaults."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


def resolve_value(explicit: T | None, default: T, prompt: Callable[[T], T] | None = None) -> T:
    """Pick the value for one input.

    Precedence: an explicit value wins; otherwise ``prompt`` is asked with the
    default as its suggestion; without a prompt the default is used.

    Examples:
        >>> resolve_value("staging", "code-base")
        'staging'
        >>> resolve_value(None, "code-base")
        'code-base'
        >>> resolve_value(None, "code-base", prompt=lambda default: default.upper())
        'CODE-BASE'
    """
    if explicit is not None:
        return explicit
    if prompt is not None:
        return prompt(default)
    return default


__all__ = ["resolve_value"]
