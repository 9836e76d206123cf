"""Redaction and JSON beautification of preference values."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Final

import orjson

from .enums import InstanceType
from .matrix import PreferenceMatrix, PreferenceRecord

REDACTION_MARKER = "*** REDACTED ***"

# String literals are matched first so digits inside them are skipped.
_TOKEN: Final[re.Pattern[str]] = re.compile(r'"(?:[^"\\]|\\.)*"|-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?')
#: Integer range orjson decodes exactly; anything wider comes back as a float.
_EXACT_INT_RANGE: Final[range] = range(-(2**63), 2**64)


@dataclass(frozen=True, slots=True)
class SanitizeRules:
    """Preference keys that get masked or pretty-printed, matched by key name only."""

    secure_preferences: frozenset[str] = frozenset()
    json_preferences: frozenset[str] = frozenset()


def beautify_json(raw: str) -> str:
    """Re-indent a JSON document with two spaces, or return ``raw`` unchanged.

    Example:
        >>> print(beautify_json('{"a":[1,2]}'))
        {
          "a": [
            1,
            2
          ]
        }
        >>> beautify_json("not json")
        'not json'
        >>> beautify_json("")
        ''

    Documents whose numbers cannot be decoded exactly are kept verbatim:

        >>> beautify_json('{"id":123456789012345678901234567890}')
        '{"id":123456789012345678901234567890}'
    """
    if not raw:
        return raw
    try:
        parsed = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw
    if not _decoded_exactly(raw, parsed):
        return raw
    try:
        return orjson.dumps(parsed, option=orjson.OPT_INDENT_2).decode("utf-8")
    except orjson.JSONEncodeError:
        return raw


def _integer_tokens_fit(raw: str) -> bool:
    for match in _TOKEN.finditer(raw):
        token = match.group()
        if token.startswith('"') or any(marker in token for marker in ".eE"):
            continue
        if int(token) not in _EXACT_INT_RANGE:
            return False
    return True


def _all_finite(value: object) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, list):
        return all(_all_finite(item) for item in value)
    if isinstance(value, dict):
        return all(_all_finite(item) for item in value.values())
    return True


def _decoded_exactly(raw: str, parsed: object) -> bool:
    """False when re-serializing ``parsed`` would change a number of ``raw``."""
    return _integer_tokens_fit(raw) and _all_finite(parsed)


def sanitize_record(record: PreferenceRecord, rules: SanitizeRules) -> PreferenceRecord:
    """Apply redaction (which takes precedence) or beautification to one record."""
    if record.key in rules.secure_preferences:
        return record.with_values(dict.fromkeys(InstanceType, REDACTION_MARKER))
    if record.key in rules.json_preferences:
        return record.with_values({tier: beautify_json(value) for tier, value in record.values.items()})
    return record


def sanitize_matrix(matrix: PreferenceMatrix, rules: SanitizeRules) -> PreferenceMatrix:
    """Return a sanitized copy of ``matrix``; the input is left untouched.

    Example:
        >>> matrix = PreferenceMatrix()
        >>> matrix.assign("global", "ApiSecret", InstanceType.ALL, "s3cr3t")
        >>> clean = sanitize_matrix(matrix, SanitizeRules(secure_preferences=frozenset({"ApiSecret"})))
        >>> sorted(set(clean.find("global", "ApiSecret")[0].values.values()))
        ['*** REDACTED ***']
        >>> matrix.find("global", "ApiSecret")[0].value(InstanceType.ALL)
        's3cr3t'
    """
    return matrix.map_records(lambda record: sanitize_record(record, rules))


__all__ = [
    "REDACTION_MARKER",
    "SanitizeRules",
    "beautify_json",
    "sanitize_matrix",
    "sanitize_record",
]
