"""Configuration loader for CloudFront distributions."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cdn_distribution.resolver import DistributionInput, ValidationError, ValidationReason

TRUE_STRINGS = ("true", "yes", "on")
FALSE_STRINGS = ("false", "no", "off")


@dataclass
class DeploymentConfig:
  """A distribution's inputs plus where and how to deploy it."""

  distribution: DistributionInput
  region: str = "us-east-1"
  attach_bucket_policy: bool = True


@dataclass
class Config:
  """Multi-distribution configuration."""

  deployments: list[DeploymentConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "deployments.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults") or {}
    deployments: list[DeploymentConfig] = []

    for entry in data.get("distributions") or []:
      # Merge defaults with distribution-specific config
      merged = {**defaults, **entry}
      deployments.append(
        DeploymentConfig(
          distribution=distribution_input_from_dict(merged),
          region=merged.get("region", "us-east-1"),
          attach_bucket_policy=_flag(merged, "attach_bucket_policy", True),
        )
      )

    return cls(deployments=deployments)


def distribution_input_from_dict(values: dict[str, Any]) -> DistributionInput:
  """Build a DistributionInput from a flat mapping of variables.

  Absent keys take the DistributionInput defaults. Required keys that are
  absent become empty strings so the resolver reports them.
  """
  return DistributionInput(
    project_name=_string(values.get("project_name")),
    environment=_string(values.get("environment")),
    s3_bucket_name=_string(values.get("s3_bucket_name")),
    s3_bucket_domain_name=_string(values.get("s3_bucket_domain_name")),
    domain_name=_string(values.get("domain_name")),
    certificate_arn=_string(values.get("certificate_arn")),
    price_class=_string(values.get("price_class", "PriceClass_100")),
    enable_logging=_flag(values, "enable_logging", False),
    logging_bucket=_string(values.get("logging_bucket")),
    create_invalidation=_flag(values, "create_invalidation", False),
  )


def _string(value: Any) -> str:
  return "" if value is None else str(value)


def _flag(values: dict[str, Any], name: str, default: bool) -> bool:
  """Read a boolean switch, accepting quoted true/false strings."""
  value = values.get(name)
  if value is None:
    return default
  if isinstance(value, bool):
    return value
  if isinstance(value, str):
    lowered = value.strip().lower()
    if lowered in TRUE_STRINGS:
      return True
    if lowered in FALSE_STRINGS:
      return False
  raise ValidationError(
    name,
    ValidationReason.INVALID_ENUM_VALUE,
    f"{name} must be true or false, got {value!r}",
  )
