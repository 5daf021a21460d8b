"""CDK stack for a single CloudFront distribution."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from cdn_distribution.cdk_constructs import CdnDistributionConstruct
from cdn_distribution.config import DeploymentConfig
from cdn_distribution.resolver import resolve


class DistributionStack(cdk.Stack):
  """Stack for a single CloudFront distribution."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    deployment_config: DeploymentConfig,
    deployment_id: str | None = None,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    distribution_input = deployment_config.distribution
    # Raises ValidationError before any resource is declared
    self.spec = resolve(distribution_input)

    self.cdn = CdnDistributionConstruct(
      self,
      "Cdn",
      spec=self.spec,
      bucket_name=distribution_input.s3_bucket_name,
      attach_bucket_policy=deployment_config.attach_bucket_policy,
      deployment_id=deployment_id,
    )

    cdk.Tags.of(self).add("Project", distribution_input.project_name)
    cdk.Tags.of(self).add("Environment", distribution_input.environment)
