"""Ticket models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class TicketType(str, Enum):
    """Admission tier. Informational only; verification ignores it."""

    STANDARD = "Standard"
    VIP = "VIP"
    SPEAKER = "Speaker"


class TicketStatus(str, Enum):
    """Redemption state. Moves ISSUED -> USED once and never back."""

    ISSUED = "ISSUED"
    USED = "USED"


class HolderDetails(BaseModel):
    """Inbound issuance payload."""

    name: str
    email: str
    type: TicketType = TicketType.STANDARD

    @field_validator("name", "email")
    @classmethod
    def validate_required(cls, value: str) -> str:
        """Reject blank holder identity before anything is written."""
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("name and email must be provided")
        return cleaned

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        """Require a local part and a domain around a single @."""
        local, at, domain = value.rpartition("@")
        if not at or not local or not domain or "@" in local:
            raise ValueError("email must look like name@domain")
        return value


class Ticket(BaseModel):
    """Persisted ticket record as owned by the ticket store."""

    id: str
    name: str
    email: str
    type: TicketType = TicketType.STANDARD
    status: TicketStatus = TicketStatus.ISSUED
    created_at: Optional[datetime] = None
    issued_by: str
    used_at: Optional[datetime] = None
    verified_by: Optional[str] = None

    @property
    def is_used(self) -> bool:
        return self.status == TicketStatus.USED


class TicketView(BaseModel):
    """Ticket plus its freshly derived credential, as returned to organizers."""

    ticket: Ticket
    payload: str
    qr_url: str
    correlation_id: Optional[str] = None
