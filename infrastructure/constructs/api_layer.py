"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the signer and DynamoDB client warm across routes.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
"""

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct


class ApiLayerConstruct(Construct):
    """Expose issuance, catalog and checkpoint endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        tickets_table_name: str,
        signing_secret_arn: str,
        signature_scheme: str,
        event_name: str,
        sender_email: str,
        revenue_per_ticket: int,
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 10,
    ) -> None:
        super().__init__(scope, construct_id)

        # Bundle Lambda code with dependencies using Docker (works in CI/CD)
        bundled_code = _lambda.Code.from_asset(
            "src",
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r . /asset-output"
                ],
            ),
        )

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            environment={
                "ENVIRONMENT": environment,
                "TICKETS_TABLE": tickets_table_name,
                "SIGNING_SECRET_ARN": signing_secret_arn,
                "SIGNATURE_SCHEME": signature_scheme,
                "EVENT_NAME": event_name,
                "SENDER_EMAIL": sender_email,
                "REVENUE_PER_TICKET": str(revenue_per_ticket),
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        # HTTP API with minimal latency and low cost.
        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"event-tickets-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
                allow_headers=["content-type", "x-actor-id"],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        route_defs = [
            (apigw.HttpMethod.GET, "/health"),
            (apigw.HttpMethod.POST, "/tickets"),
            (apigw.HttpMethod.GET, "/tickets"),
            (apigw.HttpMethod.GET, "/tickets/{id}/credential"),
            (apigw.HttpMethod.POST, "/tickets/{id}/email"),
            (apigw.HttpMethod.POST, "/verify"),
        ]

        for method, path in route_defs:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
