"""Tests for the preview script."""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

from preview_distribution import main, preview  # noqa: E402

from cdn_distribution.config import Config  # noqa: E402

CONFIG_YAML = """
defaults:
  environment: prod

distributions:
  - project_name: docs
    s3_bucket_name: docs-site
    s3_bucket_domain_name: docs-site.s3.amazonaws.com
    create_invalidation: true

  - project_name: assets
    s3_bucket_name: assets-site
    s3_bucket_domain_name: assets-site.s3.amazonaws.com
"""


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
  """Write a two-distribution config file."""
  path = tmp_path / "deployments.yaml"
  path.write_text(CONFIG_YAML)
  return path


class TestPreview:
  """Test resolving configured distributions."""

  def test_all_distributions(self, config_path: Path) -> None:
    """Verify every distribution is resolved."""
    specs = preview(Config.from_yaml(config_path))

    assert [s["originId"] for s in specs] == ["S3-docs-site", "S3-assets-site"]
    assert specs[0]["invalidation"] == {"paths": ["/*"]}

  def test_single_project(self, config_path: Path) -> None:
    """Verify filtering by project name."""
    specs = preview(Config.from_yaml(config_path), "assets")

    assert len(specs) == 1
    assert specs[0]["accessControl"]["name"] == "assets-oac"


class TestMain:
  """Test the command line entry point."""

  def test_prints_json(
    self,
    config_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
  ) -> None:
    """Verify resolved specs are printed as JSON."""
    monkeypatch.setattr(
      sys, "argv", ["preview_distribution.py", "--config", str(config_path)]
    )

    main()

    output = json.loads(capsys.readouterr().out)
    assert len(output) == 2

  def test_validation_error_exits(
    self,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
  ) -> None:
    """Verify invalid configuration exits non-zero."""
    path = tmp_path / "bad.yaml"
    path.write_text(
      """
distributions:
  - project_name: docs
    environment: prod
    s3_bucket_name: docs-site
    s3_bucket_domain_name: docs-site.s3.amazonaws.com
    price_class: Invalid
"""
    )
    monkeypatch.setattr(sys, "argv", ["preview_distribution.py", "--config", str(path)])

    with pytest.raises(SystemExit) as exc_info:
      main()

    assert exc_info.value.code == 1
    assert "invalid-enum-value" in capsys.readouterr().err
