"""
Ticket signature generation and checking.

The default ``checksum`` scheme is a keyed 32-bit rolling hash, kept so that
credentials already printed keep scanning. It is not a MAC: anyone who can
collect enough id/signature pairs may forge others. ``hmac-sha256`` is the
drop-in replacement; switching invalidates every outstanding credential.
"""

from __future__ import annotations

import hashlib
import hmac
import json

from models.credential import CredentialPayload
from utils.error_handling import ConfigurationError

CHECKSUM = "checksum"
HMAC_SHA256 = "hmac-sha256"
SCHEMES = (CHECKSUM, HMAC_SHA256)


def rolling_checksum(text: str) -> str:
    """31-multiplier hash over UTF-16 code units, wrapped to signed 32 bits, as hex."""
    data = text.encode("utf-16-le", errors="surrogatepass")
    value = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = ((value << 5) - value + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return format(abs(value), "x")


class SignatureService:
    """Pure function of (secret, ticket id); no I/O."""

    def __init__(self, secret: str, scheme: str = CHECKSUM):
        if not secret:
            raise ConfigurationError("Signing secret must not be empty")
        if scheme not in SCHEMES:
            raise ConfigurationError(f"Unknown signature scheme: {scheme}")
        self._secret = secret
        self.scheme = scheme

    def generate(self, ticket_id: str) -> str:
        """Return the signature for ``ticket_id``; same input, same output."""
        if self.scheme == HMAC_SHA256:
            return hmac.new(
                self._secret.encode("utf-8"),
                f"ticket:{ticket_id}".encode("utf-8", errors="surrogatepass"),
                hashlib.sha256,
            ).hexdigest()

        message = json.dumps({"id": ticket_id}, separators=(",", ":"), ensure_ascii=False)
        return rolling_checksum(message + self._secret)

    def verify(self, ticket_id: str, signature: str) -> bool:
        """Exact, case-sensitive match against ``generate(ticket_id)``."""
        expected = self.generate(ticket_id)
        return hmac.compare_digest(
            signature.encode("utf-8", errors="surrogatepass"), expected.encode("utf-8")
        )

    def payload_for(self, ticket_id: str) -> CredentialPayload:
        """Build the scannable credential. Recomputed on every call."""
        return CredentialPayload(id=ticket_id, signature=self.generate(ticket_id))
