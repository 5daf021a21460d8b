"""Resolve distribution inputs into a CloudFront distribution specification.

The resolver is a pure function: the same DistributionInput always yields an
equal ResolvedDistributionSpec. Validation runs before anything is derived,
so a caller either gets a complete spec or a ValidationError.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

PRICE_CLASSES = ("PriceClass_All", "PriceClass_200", "PriceClass_100")

SSL_SUPPORT_METHOD = "sni-only"
MINIMUM_PROTOCOL_VERSION = "TLSv1.2_2021"
LOGGING_PREFIX = "cloudfront-logs/"
ACCESS_CONTROL_NAME_LIMIT = 64
INVALIDATION_PATHS = ("/*",)

REQUIRED_FIELDS = (
  "project_name",
  "environment",
  "s3_bucket_name",
  "s3_bucket_domain_name",
)


class ValidationReason(str, Enum):
  """Why an input was rejected."""

  MISSING_REQUIRED = "missing-required"
  INVALID_ENUM_VALUE = "invalid-enum-value"
  CONDITIONAL_REQUIREMENT_UNMET = "conditional-requirement-unmet"


class ValidationError(ValueError):
  """Raised when a DistributionInput cannot be resolved."""

  def __init__(self, field: str, reason: ValidationReason, message: str = "") -> None:
    self.field = field
    self.reason = reason
    super().__init__(message or f"{field}: {reason.value}")


@dataclass(frozen=True)
class DistributionInput:
  """Inputs for a single distribution."""

  project_name: str
  environment: str
  s3_bucket_name: str
  s3_bucket_domain_name: str
  domain_name: str = ""
  certificate_arn: str = ""
  price_class: str = "PriceClass_100"
  enable_logging: bool = False
  logging_bucket: str = ""
  create_invalidation: bool = False


@dataclass(frozen=True)
class CustomCertificate:
  """Viewer TLS served from an ACM certificate via SNI."""

  arn: str
  ssl_method: str = SSL_SUPPORT_METHOD
  min_protocol_version: str = MINIMUM_PROTOCOL_VERSION


@dataclass(frozen=True)
class ProviderDefault:
  """Viewer TLS served from the *.cloudfront.net default certificate."""


TlsMode = CustomCertificate | ProviderDefault


@dataclass(frozen=True)
class LoggingBlock:
  """Standard access logging target."""

  bucket: str
  prefix: str = LOGGING_PREFIX
  include_cookies: bool = False


@dataclass(frozen=True)
class InvalidationDirective:
  """Cache invalidation issued on every deployment."""

  paths: tuple[str, ...] = INVALIDATION_PATHS


@dataclass(frozen=True)
class CacheBehavior:
  """Default cache behavior for the single origin."""

  viewer_protocol_policy: str = "redirect-to-https"
  allowed_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
  cached_methods: tuple[str, ...] = ("GET", "HEAD")
  compress: bool = True
  forward_query_string: bool = False
  forward_cookies: str = "none"
  min_ttl: int = 0
  default_ttl: int = 3600
  max_ttl: int = 86400


@dataclass(frozen=True)
class ErrorResponse:
  """Maps an origin error code to a page served to the viewer."""

  error_code: int
  response_code: int = 200
  response_page_path: str = "/index.html"
  error_caching_min_ttl: int = 10


DEFAULT_ERROR_RESPONSES = (ErrorResponse(error_code=403), ErrorResponse(error_code=404))


@dataclass(frozen=True)
class ResolvedDistributionSpec:
  """Everything needed to declare the distribution and its access control."""

  origin_id: str
  origin_domain_name: str
  aliases: tuple[str, ...]
  tls_mode: TlsMode
  logging_block: LoggingBlock | None
  invalidation_requested: bool
  price_class: str
  access_control_name: str
  access_control_description: str
  comment: str
  tags: tuple[tuple[str, str], ...]
  default_root_object: str = "index.html"
  ipv6_enabled: bool = True
  http_version: str = "http2"
  cache_behavior: CacheBehavior = field(default_factory=CacheBehavior)
  error_responses: tuple[ErrorResponse, ...] = DEFAULT_ERROR_RESPONSES

  @property
  def invalidation(self) -> InvalidationDirective | None:
    """The invalidation to issue, if one was requested."""
    return InvalidationDirective() if self.invalidation_requested else None

  def to_dict(self) -> dict[str, Any]:
    """Render the spec as a JSON-serialisable mapping."""
    if isinstance(self.tls_mode, CustomCertificate):
      tls_mode: dict[str, Any] = {
        "type": "CustomCertificate",
        "cloudFrontDefaultCertificate": False,
        "arn": self.tls_mode.arn,
        "sslMethod": self.tls_mode.ssl_method,
        "minProtocolVersion": self.tls_mode.min_protocol_version,
      }
    else:
      # Certificate fields stay null; CloudFront rejects them alongside the
      # default certificate.
      tls_mode = {
        "type": "ProviderDefault",
        "cloudFrontDefaultCertificate": True,
        "arn": None,
        "sslMethod": None,
        "minProtocolVersion": None,
      }

    logging_block = None
    if self.logging_block is not None:
      logging_block = {
        "bucket": self.logging_block.bucket,
        "prefix": self.logging_block.prefix,
        "includeCookies": self.logging_block.include_cookies,
      }

    rendered: dict[str, Any] = {
      "originId": self.origin_id,
      "originDomainName": self.origin_domain_name,
      "aliases": list(self.aliases),
      "tlsMode": tls_mode,
      "loggingBlock": logging_block,
      "invalidationRequested": self.invalidation_requested,
      "priceClass": self.price_class,
      "accessControl": {
        "name": self.access_control_name,
        "description": self.access_control_description,
        "originType": "s3",
        "signingBehavior": "always",
        "signingProtocol": "sigv4",
      },
      "comment": self.comment,
      "defaultRootObject": self.default_root_object,
      "ipv6Enabled": self.ipv6_enabled,
      "httpVersion": self.http_version,
      "cacheBehavior": {
        "viewerProtocolPolicy": self.cache_behavior.viewer_protocol_policy,
        "allowedMethods": list(self.cache_behavior.allowed_methods),
        "cachedMethods": list(self.cache_behavior.cached_methods),
        "compress": self.cache_behavior.compress,
        "forwardQueryString": self.cache_behavior.forward_query_string,
        "forwardCookies": self.cache_behavior.forward_cookies,
        "minTtl": self.cache_behavior.min_ttl,
        "defaultTtl": self.cache_behavior.default_ttl,
        "maxTtl": self.cache_behavior.max_ttl,
      },
      "errorResponses": [
        {
          "errorCode": response.error_code,
          "responseCode": response.response_code,
          "responsePagePath": response.response_page_path,
          "errorCachingMinTtl": response.error_caching_min_ttl,
        }
        for response in self.error_responses
      ],
      "tags": dict(self.tags),
    }
    if self.invalidation is not None:
      rendered["invalidation"] = {"paths": list(self.invalidation.paths)}
    return rendered


def validate(distribution_input: DistributionInput) -> None:
  """Raise ValidationError for the first problem found in the input."""
  for name in REQUIRED_FIELDS:
    if not getattr(distribution_input, name):
      raise ValidationError(
        name,
        ValidationReason.MISSING_REQUIRED,
        f"{name} is required and must not be empty",
      )

  if distribution_input.price_class not in PRICE_CLASSES:
    raise ValidationError(
      "price_class",
      ValidationReason.INVALID_ENUM_VALUE,
      f"price_class must be one of {', '.join(PRICE_CLASSES)}, "
      f"got {distribution_input.price_class!r}",
    )

  if distribution_input.enable_logging and not distribution_input.logging_bucket:
    raise ValidationError(
      "logging_bucket",
      ValidationReason.CONDITIONAL_REQUIREMENT_UNMET,
      "logging_bucket is required when enable_logging is true",
    )


def resolve(distribution_input: DistributionInput) -> ResolvedDistributionSpec:
  """Derive the distribution spec from validated inputs."""
  validate(distribution_input)

  project_name = distribution_input.project_name
  domain_name = distribution_input.domain_name
  # Single alias only; the input shape carries one domain.
  aliases = (domain_name,) if domain_name else ()

  tls_mode: TlsMode
  if domain_name and distribution_input.certificate_arn:
    tls_mode = CustomCertificate(arn=distribution_input.certificate_arn)
  else:
    tls_mode = ProviderDefault()

  logging_block = None
  if distribution_input.enable_logging:
    logging_block = LoggingBlock(bucket=distribution_input.logging_bucket)

  spec = ResolvedDistributionSpec(
    origin_id=f"S3-{distribution_input.s3_bucket_name}",
    origin_domain_name=distribution_input.s3_bucket_domain_name,
    aliases=aliases,
    tls_mode=tls_mode,
    logging_block=logging_block,
    invalidation_requested=distribution_input.create_invalidation,
    price_class=distribution_input.price_class,
    access_control_name=f"{project_name[:ACCESS_CONTROL_NAME_LIMIT - 4]}-oac",
    access_control_description=f"OAC for {distribution_input.s3_bucket_name}",
    comment=f"{project_name} CloudFront distribution",
    tags=(
      ("Name", f"{project_name}-distribution"),
      ("Environment", distribution_input.environment),
    ),
  )
  logger.debug(
    f"Resolved {project_name}: origin={spec.origin_id} "
    f"tls={type(tls_mode).__name__} logging={logging_block is not None}"
  )
  return spec
