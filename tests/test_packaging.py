"""Checks that pyproject.toml agrees with the installed package."""

import tomllib
from pathlib import Path

import mslc
from mslc.cli import entrypoint

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _project() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]


def test_project_version_matches_package() -> None:
    assert _project()["version"] == mslc.__version__


def test_console_script_points_at_cli_entrypoint() -> None:
    module_name, _, attr = _project()["scripts"]["mslc"].partition(":")
    module = __import__(module_name, fromlist=[attr])

    assert getattr(module, attr) is entrypoint


def test_declares_pydantic_dependency() -> None:
    assert any(dep.startswith("pydantic") for dep in _project()["dependencies"])
