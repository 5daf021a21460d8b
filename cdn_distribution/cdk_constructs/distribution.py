"""CloudFront distribution rendered from a resolved spec."""

from aws_cdk import Stack, Tags
from aws_cdk import aws_cloudfront as cloudfront
from constructs import Construct

from cdn_distribution.resolver import CustomCertificate, ResolvedDistributionSpec

Cfn = cloudfront.CfnDistribution


class CloudFrontDistribution(Construct):
  """CloudFront distribution with a single S3 origin behind an OAC.

  Uses the L1 resource so that the default-certificate mode leaves the
  custom certificate fields out of the template entirely.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    spec: ResolvedDistributionSpec,
    origin_access_control_id: str,
  ) -> None:
    super().__init__(scope, id)

    self.spec = spec

    logging_config = None
    if spec.logging_block is not None:
      logging_config = Cfn.LoggingProperty(
        bucket=spec.logging_block.bucket,
        prefix=spec.logging_block.prefix,
        include_cookies=spec.logging_block.include_cookies,
      )

    self.distribution = Cfn(
      self,
      "Distribution",
      distribution_config=Cfn.DistributionConfigProperty(
        enabled=True,
        comment=spec.comment,
        aliases=list(spec.aliases) or None,
        default_root_object=spec.default_root_object,
        ipv6_enabled=spec.ipv6_enabled,
        http_version=spec.http_version,
        price_class=spec.price_class,
        origins=[
          Cfn.OriginProperty(
            id=spec.origin_id,
            domain_name=spec.origin_domain_name,
            origin_access_control_id=origin_access_control_id,
            # OAC requires an empty OAI on S3 origins
            s3_origin_config=Cfn.S3OriginConfigProperty(origin_access_identity=""),
          )
        ],
        default_cache_behavior=self._default_cache_behavior(),
        custom_error_responses=[
          Cfn.CustomErrorResponseProperty(
            error_code=response.error_code,
            response_code=response.response_code,
            response_page_path=response.response_page_path,
            error_caching_min_ttl=response.error_caching_min_ttl,
          )
          for response in spec.error_responses
        ],
        restrictions=Cfn.RestrictionsProperty(
          geo_restriction=Cfn.GeoRestrictionProperty(restriction_type="none"),
        ),
        viewer_certificate=self._viewer_certificate(),
        logging=logging_config,
      ),
    )

    for key, value in spec.tags:
      Tags.of(self.distribution).add(key, value)

  @property
  def distribution_id(self) -> str:
    return self.distribution.ref

  @property
  def distribution_domain_name(self) -> str:
    return self.distribution.attr_domain_name

  @property
  def distribution_arn(self) -> str:
    return Stack.of(self).format_arn(
      service="cloudfront",
      region="",
      resource="distribution",
      resource_name=self.distribution.ref,
    )

  def _default_cache_behavior(self) -> Cfn.DefaultCacheBehaviorProperty:
    behavior = self.spec.cache_behavior
    return Cfn.DefaultCacheBehaviorProperty(
      target_origin_id=self.spec.origin_id,
      viewer_protocol_policy=behavior.viewer_protocol_policy,
      allowed_methods=list(behavior.allowed_methods),
      cached_methods=list(behavior.cached_methods),
      compress=behavior.compress,
      forwarded_values=Cfn.ForwardedValuesProperty(
        query_string=behavior.forward_query_string,
        cookies=Cfn.CookiesProperty(forward=behavior.forward_cookies),
      ),
      min_ttl=behavior.min_ttl,
      default_ttl=behavior.default_ttl,
      max_ttl=behavior.max_ttl,
    )

  def _viewer_certificate(self) -> Cfn.ViewerCertificateProperty:
    tls_mode = self.spec.tls_mode
    if isinstance(tls_mode, CustomCertificate):
      return Cfn.ViewerCertificateProperty(
        acm_certificate_arn=tls_mode.arn,
        ssl_support_method=tls_mode.ssl_method,
        minimum_protocol_version=tls_mode.min_protocol_version,
      )
    return Cfn.ViewerCertificateProperty(cloud_front_default_certificate=True)
