#!/usr/bin/env python3
"""CDK application entry point for CloudFront distribution infrastructure."""

import logging
import sys
import time
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from cdn_distribution.config import Config
from cdn_distribution.stacks.distribution_stack import DistributionStack

logger = logging.getLogger(__name__)


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def stack_name_for(project_name: str, environment: str) -> str:
  """CloudFormation stack name for a distribution."""
  return f"Cdn-{project_name}-{environment}".replace(".", "-").replace("_", "-")


def build_app(
  app: cdk.App,
  config: Config,
  *,
  account_id: str | None = None,
  deployment_id: str | None = None,
) -> list[DistributionStack]:
  """Create a stack for each configured distribution."""
  stacks: list[DistributionStack] = []
  for deployment in config.deployments:
    distribution = deployment.distribution
    stack_name = stack_name_for(distribution.project_name, distribution.environment)
    logger.info(f"Creating stack {stack_name} in {deployment.region}")
    stacks.append(
      DistributionStack(
        app,
        stack_name,
        deployment_config=deployment,
        deployment_id=deployment_id,
        env=cdk.Environment(
          account=account_id,
          region=deployment.region,
        ),
        description=f"CloudFront distribution for {distribution.s3_bucket_name}",
      )
    )
  return stacks


def main() -> None:
  """Create CDK app with stacks for each configured distribution."""
  logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "deployments.yaml"
  config = Config.from_yaml(Path(config_path))

  # A fresh caller reference per synth makes each deploy issue its invalidation
  deployment_id = app.node.try_get_context("deployment_id") or str(time.time())

  build_app(
    app,
    config,
    account_id=get_account_id(),
    deployment_id=deployment_id,
  )

  app.synth()


if __name__ == "__main__":
  main()
