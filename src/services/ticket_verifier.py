"""
Checkpoint verification.

A scan goes through parse -> signature check -> lookup -> atomic
ISSUED -> USED transition. Only this path decides admission; catalog
snapshots are never consulted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from models.credential import CredentialPayload
from models.ticket import Ticket, TicketStatus
from models.verification import VerificationKind, VerificationResult
from repositories.ticket_store import TicketStore
from services.signature_service import SignatureService
from utils.error_handling import StoreUnavailable
from utils.logging_config import get_logger

logger = get_logger(__name__)


class TicketVerifier:
    """Redeems credentials at most once per ticket."""

    def __init__(
        self,
        store: TicketStore,
        signer: SignatureService,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.signer = signer
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def verify(self, scanned: Union[str, bytes], actor_id: str) -> VerificationResult:
        """Resolve one scan to exactly one VerificationKind. Never raises for store errors."""
        payload = self._parse(scanned)
        if payload is None:
            logger.info("Malformed ticket payload", extra={"actor_id": actor_id})
            return VerificationResult(
                kind=VerificationKind.MALFORMED_PAYLOAD,
                message="Invalid QR format or incomplete ticket data",
            )

        if not self.signer.verify(payload.id, payload.signature):
            logger.warning(
                "Ticket signature mismatch",
                extra={
                    "ticket_id": payload.id,
                    "actor_id": actor_id,
                    "security_event": "invalid_signature",
                },
            )
            return VerificationResult(
                kind=VerificationKind.INVALID_SIGNATURE,
                message="Invalid signature",
            )

        try:
            return self._redeem(payload.id, actor_id)
        except StoreUnavailable:
            logger.exception(
                "Verification aborted: store unavailable",
                extra={"ticket_id": payload.id, "actor_id": actor_id},
            )
            return VerificationResult(
                kind=VerificationKind.STORE_UNAVAILABLE,
                message="Ticket store unavailable, please retry",
            )

    def _parse(self, scanned: Union[str, bytes]) -> Optional[CredentialPayload]:
        if not scanned:
            return None
        try:
            return CredentialPayload.model_validate_json(scanned)
        except (PydanticValidationError, ValueError):
            return None

    def _redeem(self, ticket_id: str, actor_id: str) -> VerificationResult:
        ticket = self.store.get(ticket_id)
        if ticket is None:
            logger.info("Unknown ticket scanned", extra={"ticket_id": ticket_id, "actor_id": actor_id})
            return VerificationResult(
                kind=VerificationKind.UNKNOWN_TICKET,
                message="Ticket ID not found",
            )

        if ticket.is_used:
            return self._already_used(ticket, actor_id)

        updated = self.store.conditional_update(
            ticket_id,
            expected={"status": TicketStatus.ISSUED},
            patch={
                "status": TicketStatus.USED,
                "used_at": self._clock(),
                "verified_by": actor_id,
            },
        )
        if updated is None:
            # Lost the race; whoever won already wrote the redemption fields
            current = self.store.get(ticket_id)
            if current is None:
                return VerificationResult(
                    kind=VerificationKind.UNKNOWN_TICKET,
                    message="Ticket ID not found",
                )
            return self._already_used(current, actor_id)

        logger.info(
            "Ticket admitted",
            extra={"ticket_id": ticket_id, "actor_id": actor_id, "outcome": "admitted"},
        )
        return VerificationResult(
            kind=VerificationKind.ADMITTED,
            message="Valid ticket. Access granted.",
            ticket=updated,
        )

    def _already_used(self, ticket: Ticket, actor_id: str) -> VerificationResult:
        logger.info(
            "Ticket already used",
            extra={
                "ticket_id": ticket.id,
                "actor_id": actor_id,
                "verified_by": ticket.verified_by,
                "outcome": "already_used",
            },
        )
        return VerificationResult(
            kind=VerificationKind.ALREADY_USED,
            message="Already used!",
            ticket=ticket,
        )
