"""Static package metadata surfaced to CLI commands and documentation.

Keeps the values that ``pyproject.toml`` declares available at runtime
without importing ``importlib.metadata`` on every CLI start.

Contents:
    * Module constants describing the distribution.
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config path discovery.
    * :func:`print_info` - render the metadata block for ``prefreport info``.
"""

from __future__ import annotations

#: Distribution name declared in ``pyproject.toml``.
name = "prefreport"
#: Human-readable summary shown in CLI help output.
title = "Cross-environment site preference report for commerce site exports"
#: Current release version pulled from ``pyproject.toml``.
version = "1.0.0"
#: Repository homepage.
homepage = "https://github.com/prefreport/prefreport"
#: Author attribution.
author = "prefreport maintainers"
#: Contact email.
author_email = "maintainers@prefreport.dev"
#: Console-script name published by the package.
shell_command = "prefreport"

#: Vendor identifier for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_VENDOR: str = "prefreport"
#: Application display name for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_APP: str = "Preference Report"
#: Configuration slug for lib_layered_config Linux paths and environment variables.
LAYEREDCONF_SLUG: str = "prefreport"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for prefreport:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
