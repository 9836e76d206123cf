"""Build and populate the preference matrix from a site export folder.

Export layout read by this module::

    <folder>/
        meta/*.xml                     preference metadata (attribute definitions, groups)
        preferences.xml                global preference values
        sites/<site-id>/preferences.xml  site preference values

Files are visited in sorted path order so a run is a pure function of the
folder contents. A malformed file is logged and skipped; it never aborts the
analysis.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from prefreport.domain.enums import InstanceType
from prefreport.domain.errors import MalformedDefinitionError
from prefreport.domain.matrix import GLOBAL_SCOPE, PreferenceMatrix

from .parser import PREFERENCE_SCOPES, parse_metadata, parse_preference_values

logger = logging.getLogger(__name__)

META_DIR: Final[str] = "meta"
SITES_DIR: Final[str] = "sites"
PREFERENCES_FILE: Final[str] = "preferences.xml"
SITE_SCOPE: Final[str] = PREFERENCE_SCOPES["SitePreferences"]


def discover_metadata_files(folder: Path) -> list[Path]:
    """Return the metadata documents of an export in sorted order."""
    meta_dir = folder / META_DIR
    if not meta_dir.is_dir():
        return []
    return sorted(path for path in meta_dir.glob("*.xml") if path.is_file())


def discover_preference_files(folder: Path) -> list[tuple[str, Path]]:
    """Return ``(scope, path)`` for every preference value document of an export.

    The global file comes first, followed by site files ordered by site id.
    """
    found: list[tuple[str, Path]] = []
    global_file = folder / PREFERENCES_FILE
    if global_file.is_file():
        found.append((GLOBAL_SCOPE, global_file))
    sites_dir = folder / SITES_DIR
    if sites_dir.is_dir():
        found.extend((SITE_SCOPE, path) for path in sorted(sites_dir.glob(f"*/{PREFERENCES_FILE}")) if path.is_file())
    return found


def build_catalog(folder: Path) -> PreferenceMatrix:
    """Build the initial matrix from metadata only; every tier value is ``""``.

    Args:
        folder: Root of the site export.

    Returns:
        Matrix holding one record per declared preference attribute.
    """
    matrix = PreferenceMatrix()
    for path in discover_metadata_files(folder):
        try:
            definitions = parse_metadata(path)
        except MalformedDefinitionError as exc:
            logger.warning("Skipping malformed metadata file", extra={"path": str(path), "reason": exc.reason})
            continue
        if not definitions:
            logger.debug("No preference attributes declared", extra={"path": str(path)})
            continue
        for definition in definitions:
            matrix.define(definition)
    logger.info("Preference catalog built", extra={"folder": str(folder), "preferences": len(matrix)})
    return matrix


def merge_environments(folder: Path, catalog: PreferenceMatrix) -> PreferenceMatrix:
    """Merge the tier values of every preference file into a copy of ``catalog``.

    Keys without metadata are added to the ungrouped bucket of their scope.
    Merging is keyed by identity: re-merging the same folder sets the same
    values without adding or moving records. When two site files set the same
    key and tier to different values, the file visited later wins and a
    warning names the discarded value.

    Args:
        folder: Root of the site export.
        catalog: Matrix produced by :func:`build_catalog`; not modified.

    Returns:
        New matrix with the merged values.
    """
    matrix = catalog.map_records(lambda record: record)
    origins: dict[tuple[str, str, InstanceType], tuple[Path, str]] = {}
    for scope, path in discover_preference_files(folder):
        try:
            values = parse_preference_values(path)
        except MalformedDefinitionError as exc:
            logger.warning("Skipping malformed preference file", extra={"path": str(path), "reason": exc.reason})
            continue
        tiers = sorted({value.instance_type.value for value in values})
        logger.debug("Merging preference values", extra={"path": str(path), "scope": scope, "tiers": tiers})
        for value in values:
            slot = (scope, value.key, value.instance_type)
            previous = origins.get(slot)
            if previous is not None and previous[0] != path and previous[1] != value.value:
                logger.warning(
                    "Preference value replaced by later file",
                    extra={
                        "key": value.key,
                        "tier": value.instance_type.value,
                        "path": str(path),
                        "previous_path": str(previous[0]),
                        "discarded_value": previous[1],
                    },
                )
            origins[slot] = (path, value.value)
            matrix.assign(scope, value.key, value.instance_type, value.value)
    logger.info("Environment values merged", extra={"folder": str(folder), "preferences": len(matrix)})
    return matrix


__all__ = [
    "build_catalog",
    "discover_metadata_files",
    "discover_preference_files",
    "merge_environments",
]
