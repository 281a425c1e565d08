"""Verification outcome models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from models.ticket import Ticket


class VerificationKind(str, Enum):
    """Every scan resolves to exactly one of these."""

    ADMITTED = "admitted"
    ALREADY_USED = "already_used"
    MALFORMED_PAYLOAD = "malformed_payload"
    INVALID_SIGNATURE = "invalid_signature"
    UNKNOWN_TICKET = "unknown_ticket"
    STORE_UNAVAILABLE = "store_unavailable"


# HTTP status per outcome; ALREADY_USED is a normal answer, not a failure.
STATUS_CODES = {
    VerificationKind.ADMITTED: 200,
    VerificationKind.ALREADY_USED: 200,
    VerificationKind.MALFORMED_PAYLOAD: 400,
    VerificationKind.INVALID_SIGNATURE: 403,
    VerificationKind.UNKNOWN_TICKET: 404,
    VerificationKind.STORE_UNAVAILABLE: 503,
}


class VerificationResult(BaseModel):
    """Tagged outcome of a single scan."""

    kind: VerificationKind
    message: str
    ticket: Optional[Ticket] = None

    @property
    def admitted(self) -> bool:
        return self.kind == VerificationKind.ADMITTED

    @property
    def is_error(self) -> bool:
        return self.kind not in (VerificationKind.ADMITTED, VerificationKind.ALREADY_USED)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class VerifyRequest(BaseModel):
    """Body of POST /verify: the raw text read from the QR code."""

    payload: str
