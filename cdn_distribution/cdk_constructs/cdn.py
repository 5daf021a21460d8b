"""Main composite construct for a CloudFront distribution in front of S3."""

import time

from aws_cdk import CfnOutput, Stack
from constructs import Construct

from cdn_distribution.resolver import ResolvedDistributionSpec

from .access_control import OriginAccessControl
from .distribution import CloudFrontDistribution
from .invalidation import InvalidationHandler


class CdnDistributionConstruct(Construct):
  """Complete distribution infrastructure for one resolved spec.

  Creates:
  - Origin Access Control for the S3 origin
  - CloudFront distribution
  - (Optional) Origin bucket policy granting the distribution read access
  - (Optional) Invalidation of /* on every deployment
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    spec: ResolvedDistributionSpec,
    bucket_name: str,
    attach_bucket_policy: bool = True,
    deployment_id: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    # Get the stack name for resource prefixing
    stack_name = Stack.of(self).stack_name

    self.access_control = OriginAccessControl(
      self,
      f"{stack_name}-access-control",
      spec=spec,
    )

    self.distribution = CloudFrontDistribution(
      self,
      f"{stack_name}-distribution",
      spec=spec,
      origin_access_control_id=self.access_control.access_control_id,
    )

    if attach_bucket_policy:
      self.bucket_policy = self.access_control.grant_distribution_read(
        bucket_name=bucket_name,
        distribution_arn=self.distribution.distribution_arn,
      )

    directive = spec.invalidation
    if directive is not None:
      self.invalidation = InvalidationHandler(
        self,
        f"{stack_name}-invalidation",
        distribution_id=self.distribution.distribution_id,
        directive=directive,
        caller_reference=deployment_id or str(time.time()),
        resource_prefix=stack_name,
      )
      self.invalidation.node.add_dependency(self.distribution)

    # Outputs
    CfnOutput(
      self,
      "DistributionId",
      value=self.distribution.distribution_id,
      description="CloudFront distribution ID",
    )
    CfnOutput(
      self,
      "DistributionArn",
      value=self.distribution.distribution_arn,
      description="CloudFront distribution ARN",
    )
    CfnOutput(
      self,
      "DistributionDomainName",
      value=self.distribution.distribution_domain_name,
      description="CloudFront distribution domain name",
    )
    CfnOutput(
      self,
      "DistributionHostedZoneId",
      # Fixed zone for every CloudFront alias target
      value="Z2FDTNDATAQYW2",
      description="Route 53 hosted zone ID for alias records",
    )
    CfnOutput(
      self,
      "OriginAccessControlId",
      value=self.access_control.access_control_id,
      description="CloudFront Origin Access Control ID",
    )
