"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

One Lambda keeps the signer and store client warm across routes.
"""

from typing import Callable, Tuple

from . import health_check, ticket_catalog, ticket_credential, ticket_issue, ticket_verify
from utils.http import json_response


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler while keeping shared setup (logging, error handling) centralized.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "")
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    route_key = f"{method.upper()} {path}"

    # Map route keys to handler callables. Using startswith for path params,
    # so more specific prefixes come first.
    route_table: Tuple[Tuple[str, Callable], ...] = (
        ("GET /health", health_check.lambda_handler),
        ("POST /verify", ticket_verify.lambda_handler),
        ("POST /tickets/", ticket_credential.email_handler),
        ("POST /tickets", ticket_issue.lambda_handler),
        ("GET /tickets/", ticket_credential.lambda_handler),
        ("GET /tickets", ticket_catalog.lambda_handler),
    )

    for prefix, handler in route_table:
        if route_key.startswith(prefix):
            return handler(event, context)

    return json_response(404, {"message": "Route not found", "route": route_key})
