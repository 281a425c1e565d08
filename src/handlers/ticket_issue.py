"""
Ticket issuance handler for POST /tickets.

Returns the stored ticket plus a freshly signed credential and its QR link.
"""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from models.ticket import HolderDetails, TicketView
from services import wiring
from utils.error_handling import AppError, to_response
from utils.http import json_response, parse_body, require_actor_id
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded services to avoid import-time AWS clients
_issuer: Optional["TicketIssuer"] = None
_qr_service: Optional["QrService"] = None


def _get_issuer():
    """Lazy-load TicketIssuer."""
    global _issuer
    if _issuer is None:
        from services.ticket_issuer import TicketIssuer

        _issuer = TicketIssuer(wiring.get_ticket_store(), wiring.get_signature_service())
    return _issuer


def _get_qr_service():
    """Lazy-load QrService."""
    global _qr_service
    if _qr_service is None:
        from services.qr_service import QrService

        _qr_service = QrService(wiring.get_settings().qr_base_url)
    return _qr_service


def lambda_handler(event, context):
    """Handle POST /tickets."""
    correlation_id = str(uuid.uuid4())

    try:
        actor_id = require_actor_id(event)
        holder = HolderDetails.model_validate(parse_body(event))

        issuer = _get_issuer()
        ticket = issuer.issue(holder, actor_id)
        payload = issuer.credential(ticket).to_wire()

        view = TicketView(
            ticket=ticket,
            payload=payload,
            qr_url=_get_qr_service().image_url(payload),
            correlation_id=correlation_id,
        )
        return json_response(201, view.model_dump_json())

    except PydanticValidationError as exc:
        return json_response(
            422,
            {
                "message": "Invalid request",
                "error": exc.errors(include_url=False, include_context=False),
                "correlation_id": correlation_id,
            },
        )
    except AppError as exc:
        logger.warning(
            "Ticket issuance rejected",
            extra={"correlation_id": correlation_id, "error": str(exc)},
        )
        return to_response(exc)
    except Exception:
        logger.exception("Ticket issuance failed", extra={"correlation_id": correlation_id})
        return json_response(
            500, {"message": "Internal error", "correlation_id": correlation_id}
        )
