"""CDK constructs for CloudFront distribution infrastructure."""

from .access_control import OriginAccessControl
from .cdn import CdnDistributionConstruct
from .distribution import CloudFrontDistribution
from .invalidation import InvalidationHandler

__all__ = [
  "CdnDistributionConstruct",
  "CloudFrontDistribution",
  "InvalidationHandler",
  "OriginAccessControl",
]
