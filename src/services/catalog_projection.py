"""
Read-optimized ticket catalog.

Rebuilt wholesale from each store snapshot. Purely derived state: nothing
here writes to the store or takes part in admission decisions.
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Iterable, List, Optional

from models.catalog import CatalogStats
from models.ticket import Ticket
from utils.logging_config import get_logger

logger = get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _created_key(ticket: Ticket) -> datetime:
    created = ticket.created_at
    if created is None:
        return EPOCH
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


class CatalogProjection:
    """Newest-first view of all tickets plus simple aggregates."""

    def __init__(self, revenue_per_ticket: float = 500):
        self.revenue_per_ticket = revenue_per_ticket
        self._tickets: List[Ticket] = []
        self._lock = Lock()

    def apply_snapshot(self, tickets: Iterable[Ticket]) -> None:
        """Replace the view with ``tickets`` sorted by created_at descending."""
        ordered = sorted(tickets, key=_created_key, reverse=True)
        with self._lock:
            self._tickets = ordered

    def follow(self, feed: Iterable[List[Ticket]]) -> None:
        """Apply every snapshot from ``feed`` until it is exhausted."""
        for snapshot in feed:
            self.apply_snapshot(snapshot)
            logger.info("Catalog refreshed", extra={"total": len(snapshot)})

    def tickets(self) -> List[Ticket]:
        with self._lock:
            return list(self._tickets)

    def total_count(self) -> int:
        with self._lock:
            return len(self._tickets)

    def used_count(self) -> int:
        with self._lock:
            return sum(1 for t in self._tickets if t.is_used)

    def revenue(self, multiplier: Optional[float] = None) -> float:
        """Flat ``multiplier`` x total count; not a financial ledger."""
        if multiplier is None:
            multiplier = self.revenue_per_ticket
        return multiplier * self.total_count()

    def stats(self, multiplier: Optional[float] = None) -> CatalogStats:
        with self._lock:
            tickets = list(self._tickets)
        if multiplier is None:
            multiplier = self.revenue_per_ticket
        return CatalogStats(
            total=len(tickets),
            used=sum(1 for t in tickets if t.is_used),
            revenue=multiplier * len(tickets),
        )
