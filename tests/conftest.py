"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import health_check` to work
when running tests, simulating the Lambda environment where code
is deployed from the src/ directory.
"""

import os
import sys
from pathlib import Path

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    # Add repo root first (for imports like infrastructure.*)
    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Lambda environment variables used by handlers
os.environ.setdefault("TICKETS_TABLE", "test-tickets-table")
os.environ.setdefault("TICKET_SIGNING_SECRET", "test-signing-secret")
os.environ.setdefault("SENDER_EMAIL", "tickets@example.com")

# Create a default boto3 session so resources/clients do not error during import.
boto3.setup_default_session(region_name="eu-west-2")

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def signer():
    """Signer with a known key."""
    from services.signature_service import SignatureService

    return SignatureService(TEST_SECRET)


@pytest.fixture
def store():
    """Fresh in-process ticket store."""
    from repositories.memory_repo import InMemoryTicketStore

    return InMemoryTicketStore()


@pytest.fixture
def holder():
    from models.ticket import HolderDetails, TicketType

    return HolderDetails(name="Ada Lovelace", email="ada@example.com", type=TicketType.VIP)


@pytest.fixture
def wired(store, signer):
    """Point every handler at the in-process store and known signer."""
    from handlers import ticket_catalog, ticket_credential, ticket_issue, ticket_verify
    from services import wiring
    from utils.settings import AppSettings

    settings = AppSettings(signing_secret=TEST_SECRET, sender_email="tickets@example.com")
    wiring.configure(settings=settings, store=store, signer=signer)
    ticket_issue._issuer = None
    ticket_issue._qr_service = None
    ticket_verify._verifier = None
    ticket_catalog._projection = None
    ticket_credential._notification_service = None
    yield store
    wiring.configure()
