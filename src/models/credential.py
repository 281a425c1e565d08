"""Credential payload carried by the scannable artifact."""

import json

from pydantic import BaseModel, ConfigDict, field_validator


class CredentialPayload(BaseModel):
    """
    The only data printed into a ticket's QR code.

    Everything else about the ticket is looked up server side by ``id``.
    Unknown keys in a scanned payload are dropped, never trusted.
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    id: str
    signature: str

    @field_validator("id", "signature")
    @classmethod
    def validate_present(cls, value: str) -> str:
        if not value:
            raise ValueError("id and signature must be non-empty")
        return value

    def to_wire(self) -> str:
        """Serialize as compact JSON with ``id`` before ``signature``."""
        return json.dumps({"id": self.id, "signature": self.signature}, separators=(",", ":"))
