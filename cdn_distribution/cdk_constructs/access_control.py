"""Origin Access Control for a private S3 origin."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from constructs import Construct

from cdn_distribution.resolver import ResolvedDistributionSpec


class OriginAccessControl(Construct):
  """Lets CloudFront sign requests to the bucket so it can stay private."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    spec: ResolvedDistributionSpec,
  ) -> None:
    super().__init__(scope, id)

    self.access_control = cloudfront.CfnOriginAccessControl(
      self,
      "OriginAccessControl",
      origin_access_control_config=cloudfront.CfnOriginAccessControl.OriginAccessControlConfigProperty(
        name=spec.access_control_name,
        description=spec.access_control_description,
        origin_access_control_origin_type="s3",
        signing_behavior="always",
        signing_protocol="sigv4",
      ),
    )

  @property
  def access_control_id(self) -> str:
    return self.access_control.attr_id

  def grant_distribution_read(
    self,
    *,
    bucket_name: str,
    distribution_arn: str,
  ) -> s3.BucketPolicy:
    """Attach a bucket policy allowing only this distribution to read objects.

    The policy replaces any existing policy on the bucket.
    """
    bucket = s3.Bucket.from_bucket_name(self, "OriginBucket", bucket_name)
    policy = s3.BucketPolicy(self, "OriginBucketPolicy", bucket=bucket)
    policy.document.add_statements(
      iam.PolicyStatement(
        sid="AllowCloudFrontServicePrincipal",
        actions=["s3:GetObject"],
        resources=[bucket.arn_for_objects("*")],
        principals=[iam.ServicePrincipal("cloudfront.amazonaws.com")],
        conditions={"StringEquals": {"AWS:SourceArn": distribution_arn}},
      )
    )
    return policy
