"""Lightweight health check handler."""

import os
import json
from datetime import datetime, timezone


def lambda_handler(event, context):
    """Return a simple 200 response; does not touch the tickets table."""
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(
            {
                "status": "ok",
                "environment": os.environ.get("ENVIRONMENT", "dev"),
                "tickets_table": os.environ.get("TICKETS_TABLE", "event-tickets"),
                "signature_scheme": os.environ.get("SIGNATURE_SCHEME", "checksum"),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ),
    }
