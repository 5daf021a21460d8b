"""Tests for the package layout declared in pyproject.toml."""

import tomllib
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent.parent


def test_top_level_modules_are_packaged() -> None:
  """Verify the package without __init__.py is still collected."""
  setuptools = pytest.importorskip("setuptools")
  with open(ROOT / "pyproject.toml", "rb") as f:
    find = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

  assert find["namespaces"] is True
  packages = setuptools.find_namespace_packages(where=str(ROOT), include=find["include"])
  assert "cdn_distribution" in packages
  assert "cdn_distribution.cdk_constructs" in packages
  assert "cdn_distribution.stacks" in packages
