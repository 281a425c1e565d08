"""
TicketVerifier tests against the in-process store.

Run with: pytest tests/unit/test_ticket_verifier.py -v
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from models.ticket import Ticket, TicketStatus
from models.verification import VerificationKind
from repositories.memory_repo import InMemoryTicketStore
from services.ticket_issuer import TicketIssuer
from services.ticket_verifier import TicketVerifier
from utils.error_handling import StoreUnavailable

FIXED_NOW = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def verifier(store, signer):
    return TicketVerifier(store, signer, clock=lambda: FIXED_NOW)


@pytest.fixture
def issued(store, signer, holder):
    """An ISSUED ticket and its wire payload."""
    issuer = TicketIssuer(store, signer)
    ticket = issuer.issue(holder, "organizer-1")
    return ticket, issuer.credential(ticket).to_wire()


class TestRedemption:
    def test_fresh_ticket_is_admitted(self, verifier, issued, store):
        ticket, payload = issued
        result = verifier.verify(payload, "gate-1")

        assert result.kind == VerificationKind.ADMITTED
        assert result.admitted
        assert result.ticket.status == TicketStatus.USED
        assert result.ticket.used_at == FIXED_NOW
        assert result.ticket.verified_by == "gate-1"
        assert store.get(ticket.id).status == TicketStatus.USED

    def test_rescan_is_already_used_with_original_record(self, verifier, issued, store):
        ticket, payload = issued
        verifier.verify(payload, "gate-1")

        later = TicketVerifier(store, verifier.signer, clock=lambda: datetime.now(timezone.utc))
        second = later.verify(payload, "gate-2")

        assert second.kind == VerificationKind.ALREADY_USED
        assert not second.is_error
        assert second.ticket.verified_by == "gate-1"
        assert second.ticket.used_at == FIXED_NOW

    def test_repeated_rescans_never_admit(self, verifier, issued):
        _, payload = issued
        kinds = [verifier.verify(payload, "gate-1").kind for _ in range(5)]
        assert kinds[0] == VerificationKind.ADMITTED
        assert kinds[1:] == [VerificationKind.ALREADY_USED] * 4

    def test_bytes_payload_is_accepted(self, verifier, issued):
        _, payload = issued
        assert verifier.verify(payload.encode("utf-8"), "gate-1").admitted

    def test_extra_fields_are_ignored(self, verifier, issued, signer):
        ticket, _ = issued
        payload = json.dumps(
            {"id": ticket.id, "signature": signer.generate(ticket.id), "status": "VIP-ALL-ACCESS"}
        )
        assert verifier.verify(payload, "gate-1").admitted


class TestRejections:
    def test_forged_signature(self, verifier, issued, store):
        ticket, _ = issued
        payload = json.dumps({"id": ticket.id, "signature": "wrong"})

        result = verifier.verify(payload, "gate-1")

        assert result.kind == VerificationKind.INVALID_SIGNATURE
        assert result.ticket is None
        assert store.get(ticket.id).status == TicketStatus.ISSUED

    def test_unknown_ticket(self, verifier, signer):
        payload = json.dumps({"id": "does-not-exist", "signature": signer.generate("does-not-exist")})
        result = verifier.verify(payload, "gate-1")
        assert result.kind == VerificationKind.UNKNOWN_TICKET

    @pytest.mark.parametrize(
        "scanned",
        [
            "",
            "not json at all",
            "[]",
            "null",
            '"just a string"',
            '{"id": ""}',
            '{"id": "abc"}',
            '{"signature": "abc"}',
            '{"id": "", "signature": "abc"}',
            '{"id": "abc", "signature": ""}',
            '{"id": 123, "signature": "abc"}',
            '{"id": "abc", "signature": null}',
        ],
    )
    def test_malformed_payload_never_touches_store(self, signer, scanned):
        store = MagicMock()
        verifier = TicketVerifier(store, signer)

        result = verifier.verify(scanned, "gate-1")

        assert result.kind == VerificationKind.MALFORMED_PAYLOAD
        assert result.is_error
        assert store.method_calls == []

    def test_invalid_signature_never_touches_store(self, signer):
        store = MagicMock()
        verifier = TicketVerifier(store, signer)
        result = verifier.verify(json.dumps({"id": "abc", "signature": "nope"}), "gate-1")
        assert result.kind == VerificationKind.INVALID_SIGNATURE
        assert store.method_calls == []

    def test_store_outage_is_reported_not_raised(self, signer):
        store = MagicMock()
        store.get.side_effect = StoreUnavailable()
        verifier = TicketVerifier(store, signer)
        payload = signer.payload_for("abc").to_wire()

        result = verifier.verify(payload, "gate-1")

        assert result.kind == VerificationKind.STORE_UNAVAILABLE
        assert result.status_code == 503

    def test_unparseable_stored_record_is_store_unavailable(self, signer):
        from repositories.dynamodb_repo import DynamoDbTicketStore

        table = MagicMock()
        table.get_item.return_value = {
            "Item": {"id": "t1", "name": "A", "email": "a@x.io", "status": "ISSUED"}
        }
        verifier = TicketVerifier(DynamoDbTicketStore("tickets", table=table), signer)

        result = verifier.verify(signer.payload_for("t1").to_wire(), "gate-1")

        assert result.kind == VerificationKind.STORE_UNAVAILABLE
        table.update_item.assert_not_called()


class _RacingStore(InMemoryTicketStore):
    """Holds every reader of an ISSUED ticket until all racers have read it."""

    def __init__(self, parties: int):
        super().__init__()
        self.barrier = threading.Barrier(parties)

    def get(self, ticket_id):
        ticket = super().get(ticket_id)
        if ticket is not None and ticket.status == TicketStatus.ISSUED:
            self.barrier.wait(timeout=10)
        return ticket


class TestConcurrency:
    @pytest.mark.parametrize("racers", [2, 8, 25])
    def test_exactly_one_admission_under_contention(self, signer, holder, racers):
        store = _RacingStore(racers)
        ticket = TicketIssuer(store, signer).issue(holder, "organizer-1")
        payload = signer.payload_for(ticket.id).to_wire()
        verifier = TicketVerifier(store, signer)

        with ThreadPoolExecutor(max_workers=racers) as pool:
            results = list(
                pool.map(lambda n: verifier.verify(payload, f"gate-{n}"), range(racers))
            )

        kinds = [r.kind for r in results]
        assert kinds.count(VerificationKind.ADMITTED) == 1
        assert kinds.count(VerificationKind.ALREADY_USED) == racers - 1

        winner = next(r for r in results if r.admitted)
        stored = store.get(ticket.id)
        assert stored.verified_by == winner.ticket.verified_by
        # Losers report the winner's redemption, not their own
        for r in results:
            assert r.ticket.verified_by == stored.verified_by

    def test_lost_race_rereads_record(self, signer):
        store = MagicMock()
        issued = Ticket(id="t1", name="A", email="a@x.io", issued_by="org", status=TicketStatus.ISSUED)
        used = issued.model_copy(update={"status": TicketStatus.USED, "verified_by": "gate-9"})
        store.get.side_effect = [issued, used]
        store.conditional_update.return_value = None
        verifier = TicketVerifier(store, signer)

        result = verifier.verify(signer.payload_for("t1").to_wire(), "gate-1")

        assert result.kind == VerificationKind.ALREADY_USED
        assert result.ticket.verified_by == "gate-9"
        assert store.get.call_count == 2
