"""Storage contract the ticketing core depends on."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

from models.ticket import Ticket


class TicketStore(ABC):
    """
    Authoritative home of ticket records.

    Implementations must apply ``conditional_update`` indivisibly: the
    predicate check and the patch either both happen or neither does.
    Client failures surface as ``StoreUnavailable``.
    """

    @abstractmethod
    def create(self, record: Dict[str, Any]) -> Ticket:
        """Insert a record, assigning ``id`` and ``created_at``."""

    @abstractmethod
    def get(self, ticket_id: str) -> Optional[Ticket]:
        """Point read; None when the id is unknown."""

    @abstractmethod
    def conditional_update(
        self,
        ticket_id: str,
        expected: Dict[str, Any],
        patch: Dict[str, Any],
    ) -> Optional[Ticket]:
        """
        Apply ``patch`` only if every ``expected`` field equals its value.

        Returns the updated ticket, or None when the precondition failed or
        the record does not exist.
        """

    @abstractmethod
    def list_tickets(self) -> List[Ticket]:
        """Return a full snapshot of all tickets."""

    @abstractmethod
    def subscribe(self) -> Iterator[List[Ticket]]:
        """Yield full snapshots, the first immediately and then one per change."""


def to_item(values: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten enums and datetimes into plain attribute values."""
    item: Dict[str, Any] = {}
    for key, value in values.items():
        if hasattr(value, "isoformat"):
            value = value.isoformat()
        elif hasattr(value, "value"):
            value = value.value
        item[key] = value
    return item
