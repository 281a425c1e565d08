"""
Credential email delivery via Amazon SES.

The message carries a link to the QR image only; the signed payload itself
is rebuilt by the caller right before sending.
"""

from __future__ import annotations

from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from models.ticket import Ticket
from services.qr_service import EMAIL_SIZE, QrService
from utils.error_handling import ConfigurationError, NotificationFailed
from utils.logging_config import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Sends a ticket holder their credential."""

    def __init__(
        self,
        sender: str,
        event_name: str,
        qr_service: Optional[QrService] = None,
        client=None,
    ):
        self.sender = sender
        self.event_name = event_name
        self.qr_service = qr_service or QrService()
        self.client = client if client is not None else boto3.client("ses")

    def compose(self, ticket: Ticket, payload: str) -> dict:
        """Build subject and body for ``ticket``."""
        qr_url = self.qr_service.image_url(payload, size=EMAIL_SIZE)
        return {
            "subject": f"Your Ticket: {self.event_name}",
            "body": f"Hello {ticket.name},\n\nHere is your ticket.\n\nLink to QR: {qr_url}",
        }

    def send_ticket(self, ticket: Ticket, payload: str) -> str:
        """Email the credential to the ticket holder; returns the SES message id."""
        if not self.sender:
            raise ConfigurationError("SENDER_EMAIL is not configured")

        message = self.compose(ticket, payload)
        try:
            resp = self.client.send_email(
                Source=self.sender,
                Destination={"ToAddresses": [ticket.email]},
                Message={
                    "Subject": {"Data": message["subject"], "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": message["body"], "Charset": "UTF-8"}},
                },
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "Ticket email failed",
                extra={"ticket_id": ticket.id, "error": str(exc)},
            )
            raise NotificationFailed() from exc

        message_id = resp.get("MessageId", "")
        logger.info("Ticket emailed", extra={"ticket_id": ticket.id, "message_id": message_id})
        return message_id
