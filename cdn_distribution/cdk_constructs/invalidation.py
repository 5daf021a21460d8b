"""CloudFront cache invalidation issued as part of each deployment."""

from aws_cdk import CustomResource, Duration
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import custom_resources as cr
from constructs import Construct

from cdn_distribution.resolver import InvalidationDirective


class InvalidationHandler(Construct):
  """Custom Resource that invalidates the distribution's cached content.

  The caller reference changes on every synth, so CloudFormation updates the
  resource and a new invalidation is created on every deployment.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    distribution_id: str,
    directive: InvalidationDirective,
    caller_reference: str,
    resource_prefix: str = "",
  ) -> None:
    super().__init__(scope, id)

    # Lambda function for invalidation
    self.handler = lambda_.Function(
      self,
      f"{resource_prefix}-invalidation-lambda" if resource_prefix else "Handler",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="index.handler",
      code=lambda_.Code.from_inline(self._get_invalidation_code()),
      timeout=Duration.seconds(30),
    )

    # Grant CloudFront invalidation permissions
    self.handler.add_to_role_policy(
      iam.PolicyStatement(
        actions=["cloudfront:CreateInvalidation"],
        resources=[f"arn:aws:cloudfront::*:distribution/{distribution_id}"],
      )
    )

    provider = cr.Provider(
      self,
      f"{resource_prefix}-invalidation-provider" if resource_prefix else "Provider",
      on_event_handler=self.handler,
    )

    self.custom_resource = CustomResource(
      self,
      f"{resource_prefix}-invalidation-resource" if resource_prefix else "Resource",
      service_token=provider.service_token,
      properties={
        "DistributionId": distribution_id,
        "Paths": list(directive.paths),
        "CallerReference": caller_reference,
      },
    )

  @property
  def invalidation_id(self) -> str:
    return self.custom_resource.get_att_string("InvalidationId")

  def _get_invalidation_code(self) -> str:
    return """
import boto3

def handler(event, context):
    request_type = event["RequestType"]
    if request_type == "Delete":
        # Invalidations cannot be undone
        return {"PhysicalResourceId": event["PhysicalResourceId"]}

    props = event["ResourceProperties"]
    paths = props["Paths"]

    cloudfront = boto3.client("cloudfront")
    response = cloudfront.create_invalidation(
        DistributionId=props["DistributionId"],
        InvalidationBatch={
            "Paths": {
                "Quantity": len(paths),
                "Items": paths
            },
            "CallerReference": props["CallerReference"]
        }
    )

    invalidation_id = response["Invalidation"]["Id"]
    print(f"{request_type}: created invalidation {invalidation_id} for {paths}")
    return {
        "PhysicalResourceId": invalidation_id,
        "Data": {"InvalidationId": invalidation_id}
    }
"""
