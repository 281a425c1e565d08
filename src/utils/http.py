"""Request/response helpers for API Gateway HTTP API events."""

import json
from typing import Any, Dict, Optional

from utils.error_handling import UnauthorizedError, ValidationError

ACTOR_HEADER = "x-actor-id"


def json_response(status: int, body: Any) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": body if isinstance(body, str) else json.dumps(body),
    }


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Decode a JSON object request body; an empty body yields {}."""
    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValidationError("Request body must be valid JSON") from exc
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def actor_id_from(event: Dict[str, Any]) -> Optional[str]:
    """
    Resolve the opaque actor id for a request.

    A JWT authorizer's ``sub`` claim wins over the header; neither is
    interpreted beyond being stored on the ticket.
    """
    claims = (
        event.get("requestContext", {})
        .get("authorizer", {})
        .get("jwt", {})
        .get("claims", {})
    )
    if claims.get("sub"):
        return str(claims["sub"])

    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    actor = (headers.get(ACTOR_HEADER) or "").strip()
    return actor or None


def require_actor_id(event: Dict[str, Any]) -> str:
    """Return the actor id or raise UnauthorizedError."""
    actor = actor_id_from(event)
    if not actor:
        raise UnauthorizedError()
    return actor


def path_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """Read a path parameter, falling back to the raw path segment after /tickets/."""
    params = event.get("pathParameters") or {}
    if params.get(name):
        return params[name]

    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    parts = [p for p in path.split("/") if p]
    if len(parts) >= 2 and parts[0] == "tickets":
        return parts[1]
    return None
