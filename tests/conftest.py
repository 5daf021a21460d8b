"""Pytest fixtures for resolver and CDK construct tests."""

import aws_cdk as cdk
import pytest

from cdn_distribution.config import DeploymentConfig
from cdn_distribution.resolver import DistributionInput


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def distribution_input() -> DistributionInput:
  """Minimal valid input with every optional feature off."""
  return DistributionInput(
    project_name="my-project",
    environment="test",
    s3_bucket_name="my-bucket",
    s3_bucket_domain_name="my-bucket.s3.us-east-1.amazonaws.com",
  )


@pytest.fixture
def deployment_config(distribution_input: DistributionInput) -> DeploymentConfig:
  """Deployment wrapping the minimal input."""
  return DeploymentConfig(distribution=distribution_input)
