"""Public package surface for the site export preference report.

- Domain exports: the preference matrix and its record types
- Application exports: the analysis use case
- Composition exports: wired adapter services
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.analysis import analyze_site_export

# Composition exports (wired adapters)
from .composition import build_catalog, get_config, merge_environments, write_reports

# Domain exports
from .domain.enums import InstanceType
from .domain.matrix import PreferenceDefinition, PreferenceMatrix, PreferenceRecord
from .domain.report import PreferenceReport

__all__ = [
    "InstanceType",
    "PreferenceDefinition",
    "PreferenceMatrix",
    "PreferenceRecord",
    "PreferenceReport",
    "analyze_site_export",
    "build_catalog",
    "get_config",
    "merge_environments",
    "print_info",
    "write_reports",
]
