"""CDK stacks for CloudFront distribution infrastructure."""

from .distribution_stack import DistributionStack

__all__ = ["DistributionStack"]
