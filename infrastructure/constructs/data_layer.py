"""
Data layer construct: DynamoDB tickets table + signing secret.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_secretsmanager as secretsmanager,
    aws_dynamodb as dynamodb,
)
from constructs import Construct


class DataLayerConstruct(Construct):
    """Provision ticket storage and the credential signing key."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
    ) -> None:
        super().__init__(scope, construct_id)

        # Signing key, generated once and never rotated (rotation voids printed tickets).
        self.signing_secret = secretsmanager.Secret(
            self,
            "TicketSigningSecret",
            generate_secret_string=secretsmanager.SecretStringGenerator(
                password_length=48,
                exclude_punctuation=True,
            ),
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )

        # Tickets keyed by id; redemption relies on conditional UpdateItem.
        self.tickets_table = dynamodb.Table(
            self,
            "Tickets",
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=environment == "prod",
            removal_policy=RemovalPolicy.RETAIN if environment == "prod" else RemovalPolicy.DESTROY,
        )
