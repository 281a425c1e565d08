"""Ticket issuance."""

from __future__ import annotations

from models.credential import CredentialPayload
from models.ticket import HolderDetails, Ticket, TicketStatus
from repositories.ticket_store import TicketStore
from services.signature_service import SignatureService
from utils.error_handling import IssuanceFailed, StoreUnavailable
from utils.logging_config import get_logger
from utils.validators import ensure_present

logger = get_logger(__name__)


class TicketIssuer:
    """Creates ISSUED tickets and derives their credentials on demand."""

    def __init__(self, store: TicketStore, signer: SignatureService):
        self.store = store
        self.signer = signer

    def issue(self, holder: HolderDetails, actor_id: str) -> Ticket:
        """
        Persist a new ticket for ``holder``.

        Raises ValidationError for blank input and IssuanceFailed when the
        store write does not complete. A failed write leaves no record.
        """
        ensure_present(holder.name, "name")
        ensure_present(holder.email, "email")
        ensure_present(actor_id, "actor_id")

        record = {
            "name": holder.name,
            "email": holder.email,
            "type": holder.type,
            "status": TicketStatus.ISSUED,
            "issued_by": actor_id,
        }
        try:
            ticket = self.store.create(record)
        except StoreUnavailable as exc:
            logger.error("Ticket issuance failed", extra={"actor_id": actor_id})
            raise IssuanceFailed() from exc
        except Exception as exc:
            logger.exception("Ticket issuance failed", extra={"actor_id": actor_id})
            raise IssuanceFailed() from exc

        logger.info(
            "Ticket issued",
            extra={"ticket_id": ticket.id, "actor_id": actor_id, "type": ticket.type.value},
        )
        return ticket

    def credential(self, ticket: Ticket) -> CredentialPayload:
        """Signed credential for ``ticket``; never cached so it tracks the key."""
        return self.signer.payload_for(ticket.id)
