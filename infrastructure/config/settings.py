"""
Environment-specific configuration settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Deployment settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "eu-west-2"  # Default AWS region

    # Event
    event_name: str = "2025 Global Summit"
    sender_email: str = ""  # Must be an SES-verified identity to send tickets
    revenue_per_ticket: int = 500

    # Signing
    signature_scheme: str = "checksum"

    # Lambda Configuration
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 10

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = dict(
            environment=env,
            aws_region=os.environ.get("AWS_REGION", "eu-west-2"),
            event_name=os.environ.get("EVENT_NAME", "2025 Global Summit"),
            sender_email=os.environ.get("SENDER_EMAIL", ""),
            signature_scheme=os.environ.get("SIGNATURE_SCHEME", "checksum"),
        )

        # Production overrides
        if env == "prod":
            return cls(
                **common,
                lambda_memory_mb=512,
                lambda_timeout_seconds=15,
            )

        return cls(**common)
