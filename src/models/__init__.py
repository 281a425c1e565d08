"""Pydantic models for API payloads and ticket records."""

from models.catalog import CatalogResponse, CatalogStats  # noqa: F401
from models.credential import CredentialPayload  # noqa: F401
from models.response import ApiResponse  # noqa: F401
from models.ticket import (  # noqa: F401
    HolderDetails,
    Ticket,
    TicketStatus,
    TicketType,
    TicketView,
)
from models.verification import (  # noqa: F401
    VerificationKind,
    VerificationResult,
    VerifyRequest,
)
