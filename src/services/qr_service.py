"""QR image URLs for credential payloads (rendering is done by an external service)."""

from urllib.parse import quote

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"

DISPLAY_SIZE = 150
EMAIL_SIZE = 300


class QrService:
    """Builds image URLs; the payload string is passed through as-is."""

    def __init__(self, base_url: str = "https://api.qrserver.com/v1/create-qr-code/"):
        self.base_url = base_url

    def image_url(self, payload: str, size: int = DISPLAY_SIZE) -> str:
        data = quote(payload, safe=_URI_COMPONENT_SAFE)
        return f"{self.base_url}?size={size}x{size}&data={data}"
