"""In-process ticket store for local runs and tests."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

from models.ticket import Ticket
from repositories.ticket_store import TicketStore, to_item


class InMemoryTicketStore(TicketStore):
    """Thread-safe dict-backed store with a push-style change feed."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._items: Dict[str, Dict[str, Any]] = {}
        self._version = 0
        self._changed = threading.Condition(threading.Lock())
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def create(self, record: Dict[str, Any]) -> Ticket:
        with self._changed:
            ticket_id = uuid.uuid4().hex
            item = to_item(record)
            item["id"] = ticket_id
            item["created_at"] = self._clock().isoformat()
            # Validate before storing so a bad record is never observable
            ticket = Ticket.model_validate(item)
            self._items[ticket_id] = item
            self._bump()
            return ticket

    def get(self, ticket_id: str) -> Optional[Ticket]:
        with self._changed:
            item = self._items.get(ticket_id)
            return Ticket.model_validate(item) if item else None

    def conditional_update(
        self,
        ticket_id: str,
        expected: Dict[str, Any],
        patch: Dict[str, Any],
    ) -> Optional[Ticket]:
        expected_values = to_item(expected)
        with self._changed:
            item = self._items.get(ticket_id)
            if item is None:
                return None
            if any(item.get(k) != v for k, v in expected_values.items()):
                return None
            updated = {**item, **to_item(patch)}
            ticket = Ticket.model_validate(updated)
            self._items[ticket_id] = updated
            self._bump()
            return ticket

    def list_tickets(self) -> List[Ticket]:
        with self._changed:
            return [Ticket.model_validate(item) for item in self._items.values()]

    def subscribe(self) -> Iterator[List[Ticket]]:
        seen = -1
        while True:
            with self._changed:
                self._changed.wait_for(lambda: self._version != seen)
                seen = self._version
                snapshot = [Ticket.model_validate(item) for item in self._items.values()]
            yield snapshot

    def _bump(self) -> None:
        """Record a change and wake subscribers. Caller holds the lock."""
        self._version += 1
        self._changed.notify_all()
