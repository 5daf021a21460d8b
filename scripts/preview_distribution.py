#!/usr/bin/env python3
"""Print the resolved distribution spec for each configured distribution."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cdn_distribution.config import Config  # noqa: E402
from cdn_distribution.resolver import ValidationError, resolve  # noqa: E402


def preview(config: Config, project: str | None = None) -> list[dict[str, Any]]:
  """Resolve every (or one) configured distribution.

  Args:
    config: Loaded configuration
    project: Only resolve the distribution with this project name

  Returns:
    List of resolved specs as plain dictionaries
  """
  specs = []
  for deployment in config.deployments:
    if project and deployment.distribution.project_name != project:
      continue
    specs.append(resolve(deployment.distribution).to_dict())
  return specs


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(
    description="Preview the CloudFront distribution spec resolved from config"
  )
  parser.add_argument(
    "--config",
    default="deployments.yaml",
    help="Path to the deployments file (default: deployments.yaml)",
  )
  parser.add_argument(
    "--project",
    help="Only show the distribution for this project name",
  )

  args = parser.parse_args()

  try:
    config = Config.from_yaml(Path(args.config))
    specs = preview(config, args.project)
  except ValidationError as e:
    print(f"Invalid configuration: {e} ({e.reason.value})", file=sys.stderr)
    sys.exit(1)

  print(json.dumps(specs, indent=2, sort_keys=True))


if __name__ == "__main__":
  main()
