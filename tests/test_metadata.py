"""Package metadata, pyproject sync, and PEP 561 marker tests.

``__init__conf__`` mirrors pyproject.toml; drift would break config path
resolution (``LAYEREDCONF_*``) or report a wrong version.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pytest
import rtoml

from prefreport import __init__conf__

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def _load_pyproject() -> dict[str, Any]:
    return rtoml.load(PYPROJECT_PATH)


def _wheel_table() -> dict[str, Any]:
    tool_table = cast(dict[str, Any], _load_pyproject().get("tool", {}))
    hatch_table = cast(dict[str, Any], tool_table.get("hatch", {}))
    targets_table = cast(dict[str, Any], cast(dict[str, Any], hatch_table.get("build", {})).get("targets", {}))
    return cast(dict[str, Any], targets_table.get("wheel", {}))


def _get_package_dir() -> Path:
    for package_entry in cast(list[Any], _wheel_table().get("packages", [])):
        candidate = PROJECT_ROOT / str(package_entry)
        if candidate.is_dir():
            return candidate
    raise AssertionError("Unable to locate package directory")


@pytest.mark.os_agnostic
def test_when_print_info_runs_it_outputs_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    from prefreport import print_info

    print_info()

    captured = capsys.readouterr().out
    assert "Info for prefreport:" in captured
    assert "version" in captured


@pytest.mark.os_agnostic
def test_metadata_constants_are_set() -> None:
    assert __init__conf__.name == "prefreport"
    assert __init__conf__.shell_command == "prefreport"
    assert __init__conf__.LAYEREDCONF_VENDOR.strip()
    assert __init__conf__.LAYEREDCONF_APP.strip()


@pytest.mark.os_agnostic
def test_version_matches_pyproject_toml() -> None:
    assert __init__conf__.version == _load_pyproject()["project"]["version"]


@pytest.mark.os_agnostic
def test_name_and_slug_match_pyproject_toml() -> None:
    """The slug names the Linux config directory (~/.config/<slug>/)."""
    project_name = _load_pyproject()["project"]["name"]

    assert __init__conf__.name == project_name
    assert __init__conf__.LAYEREDCONF_SLUG == project_name.replace("_", "-")


@pytest.mark.os_agnostic
def test_console_script_points_at_entry_main() -> None:
    scripts = _load_pyproject()["project"]["scripts"]

    assert scripts[__init__conf__.shell_command] == "prefreport.entry:main"


@pytest.mark.os_agnostic
def test_py_typed_marker_exists_and_ships_in_wheel() -> None:
    assert (_get_package_dir() / "py.typed").is_file()
    includes = cast(list[str], _wheel_table().get("include", []))
    assert any("py.typed" in entry for entry in includes)


@pytest.mark.os_agnostic
def test_default_config_ships_in_wheel() -> None:
    assert (_get_package_dir() / "adapters" / "config" / "defaultconfig.toml").is_file()
    includes = cast(list[str], _wheel_table().get("include", []))
    assert any(entry.endswith("defaultconfig.toml") for entry in includes)
