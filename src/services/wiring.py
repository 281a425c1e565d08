"""
Process-wide singletons shared by handlers.

Built lazily on first use so importing a handler never touches AWS, and
reused across warm Lambda invocations.
"""

from __future__ import annotations

from typing import Optional

from repositories.ticket_store import TicketStore
from services.signature_service import SignatureService
from utils.settings import AppSettings

_settings: Optional[AppSettings] = None
_store: Optional[TicketStore] = None
_signer: Optional[SignatureService] = None


def get_settings() -> AppSettings:
    global _settings
    if _settings is None:
        _settings = AppSettings.from_environment()
    return _settings


def get_ticket_store() -> TicketStore:
    """DynamoDB store for the configured table."""
    global _store
    if _store is None:
        from repositories.dynamodb_repo import DynamoDbTicketStore

        settings = get_settings()
        _store = DynamoDbTicketStore(
            settings.tickets_table, poll_seconds=settings.catalog_poll_seconds
        )
    return _store


def get_signature_service() -> SignatureService:
    """Signer keyed with the configured secret; loaded once, never rotated."""
    global _signer
    if _signer is None:
        settings = get_settings()
        _signer = SignatureService(settings.signing_secret, scheme=settings.signature_scheme)
    return _signer


def configure(
    settings: Optional[AppSettings] = None,
    store: Optional[TicketStore] = None,
    signer: Optional[SignatureService] = None,
) -> None:
    """Replace the shared instances (local runs and tests)."""
    global _settings, _store, _signer
    _settings, _store, _signer = settings, store, signer
