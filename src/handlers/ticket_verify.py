"""
Checkpoint handler for POST /verify.

Every response carries a ``kind`` so scanners can render admitted,
already-used and rejected scans distinctly.
"""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from models.verification import VerificationKind, VerificationResult, VerifyRequest
from services import wiring
from utils.error_handling import AppError, to_response
from utils.http import json_response, parse_body, require_actor_id
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded service to avoid import-time AWS clients
_verifier: Optional["TicketVerifier"] = None


def _get_verifier():
    """Lazy-load TicketVerifier."""
    global _verifier
    if _verifier is None:
        from services.ticket_verifier import TicketVerifier

        _verifier = TicketVerifier(wiring.get_ticket_store(), wiring.get_signature_service())
    return _verifier


def lambda_handler(event, context):
    """Handle POST /verify."""
    correlation_id = str(uuid.uuid4())

    try:
        actor_id = require_actor_id(event)
    except AppError as exc:
        return to_response(exc)

    try:
        request = VerifyRequest.model_validate(parse_body(event))
    except (AppError, PydanticValidationError):
        result = VerificationResult(
            kind=VerificationKind.MALFORMED_PAYLOAD,
            message="Request must carry the scanned payload",
        )
    else:
        try:
            result = _get_verifier().verify(request.payload, actor_id)
        except Exception:
            logger.exception("Verification failed", extra={"correlation_id": correlation_id})
            return json_response(
                500, {"message": "Internal error", "correlation_id": correlation_id}
            )

    logger.info(
        "Scan processed",
        extra={
            "correlation_id": correlation_id,
            "actor_id": actor_id,
            "outcome": result.kind.value,
        },
    )
    body = result.model_dump(mode="json")
    body["correlation_id"] = correlation_id
    return json_response(result.status_code, body)
