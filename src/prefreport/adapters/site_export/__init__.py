"""Site export adapter - reads metadata and preference files from an export folder.

Contents:
    * :mod:`.parser` - Structural parsing of export XML documents
    * :mod:`.catalog` - Catalog building and per-tier value merging
"""

from __future__ import annotations

from .catalog import build_catalog, merge_environments
from .parser import PreferenceValue, parse_metadata, parse_preference_values

__all__ = [
    "PreferenceValue",
    "build_catalog",
    "merge_environments",
    "parse_metadata",
    "parse_preference_values",
]
