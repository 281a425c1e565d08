"""
Runtime settings for the ticketing Lambda.

Loaded once per container from environment variables. The signing secret is
injected into SignatureService from here rather than living as a constant.
"""

from dataclasses import dataclass
import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.error_handling import ConfigurationError
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEV_SIGNING_SECRET = "dev-ticket-secret-change-in-production"


def _load_secret(secret_arn: str) -> str:
    """Read the signing key from Secrets Manager."""
    try:
        sm = boto3.client("secretsmanager")
        return sm.get_secret_value(SecretId=secret_arn)["SecretString"]
    except (ClientError, BotoCoreError, KeyError) as exc:
        logger.error("Failed to load signing secret", extra={"error": str(exc)})
        raise ConfigurationError("Signing secret could not be loaded") from exc


@dataclass
class AppSettings:
    """Application settings with development-friendly defaults."""

    environment: str = "dev"
    tickets_table: str = "event-tickets"

    # Signing
    signing_secret: str = DEV_SIGNING_SECRET
    signature_scheme: str = "checksum"

    # Credential delivery
    qr_base_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    event_name: str = "2025 Global Summit"
    sender_email: str = ""

    # Catalog
    revenue_per_ticket: int = 500
    catalog_poll_seconds: float = 5.0

    @classmethod
    def from_environment(cls) -> "AppSettings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")

        secret = os.environ.get("TICKET_SIGNING_SECRET", "")
        if not secret and os.environ.get("SIGNING_SECRET_ARN"):
            secret = _load_secret(os.environ["SIGNING_SECRET_ARN"])
        if not secret:
            # Only dev may fall back to the well-known secret
            if env != "dev":
                raise ConfigurationError("TICKET_SIGNING_SECRET must be set")
            secret = DEV_SIGNING_SECRET

        try:
            revenue = int(os.environ.get("REVENUE_PER_TICKET", "500"))
            poll_seconds = float(os.environ.get("CATALOG_POLL_SECONDS", "5"))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            environment=env,
            tickets_table=os.environ.get("TICKETS_TABLE", "event-tickets"),
            signing_secret=secret,
            signature_scheme=os.environ.get("SIGNATURE_SCHEME", "checksum"),
            qr_base_url=os.environ.get(
                "QR_BASE_URL", "https://api.qrserver.com/v1/create-qr-code/"
            ),
            event_name=os.environ.get("EVENT_NAME", "2025 Global Summit"),
            sender_email=os.environ.get("SENDER_EMAIL", ""),
            revenue_per_ticket=revenue,
            catalog_poll_seconds=poll_seconds,
        )
