"""Handlers for GET /tickets/{id}/credential and POST /tickets/{id}/email."""

from __future__ import annotations

import uuid
from typing import Optional

from models.response import ApiResponse
from models.ticket import Ticket, TicketView
from services import wiring
from services.qr_service import QrService
from utils.error_handling import AppError, NotFoundError, ValidationError, to_response
from utils.http import json_response, path_param, require_actor_id
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Lazy-loaded service to avoid creating the SES client at import time
_notification_service: Optional["NotificationService"] = None


def _get_notification_service():
    """Lazy-load NotificationService."""
    global _notification_service
    if _notification_service is None:
        from services.notification_service import NotificationService

        settings = wiring.get_settings()
        _notification_service = NotificationService(
            sender=settings.sender_email,
            event_name=settings.event_name,
            qr_service=QrService(settings.qr_base_url),
        )
    return _notification_service


def _load_ticket(event) -> Ticket:
    ticket_id = path_param(event, "id")
    if not ticket_id:
        raise ValidationError("Ticket id is required")
    ticket = wiring.get_ticket_store().get(ticket_id)
    if ticket is None:
        raise NotFoundError("Ticket not found")
    return ticket


def lambda_handler(event, context):
    """Recompute the signed credential and QR link for an existing ticket."""
    correlation_id = str(uuid.uuid4())
    try:
        require_actor_id(event)
        ticket = _load_ticket(event)
        payload = wiring.get_signature_service().payload_for(ticket.id).to_wire()
    except AppError as exc:
        return to_response(exc)

    view = TicketView(
        ticket=ticket,
        payload=payload,
        qr_url=QrService(wiring.get_settings().qr_base_url).image_url(payload),
        correlation_id=correlation_id,
    )
    return json_response(200, view.model_dump_json())


def email_handler(event, context):
    """Send the ticket holder their credential."""
    correlation_id = str(uuid.uuid4())
    try:
        actor_id = require_actor_id(event)
        ticket = _load_ticket(event)
        payload = wiring.get_signature_service().payload_for(ticket.id).to_wire()
        message_id = _get_notification_service().send_ticket(ticket, payload)
    except AppError as exc:
        logger.warning(
            "Ticket email rejected",
            extra={"correlation_id": correlation_id, "error": str(exc)},
        )
        return to_response(exc)

    logger.info(
        "Ticket email requested",
        extra={"correlation_id": correlation_id, "ticket_id": ticket.id, "actor_id": actor_id},
    )
    response = ApiResponse(
        message="Ticket sent",
        data={"ticket_id": ticket.id, "message_id": message_id},
        correlation_id=correlation_id,
    )
    return json_response(202, response.model_dump_json())
