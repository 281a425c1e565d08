"""NotificationService and QrService tests with a fake SES client."""

from unittest.mock import MagicMock
from urllib.parse import unquote

import pytest
from botocore.exceptions import ClientError

from models.ticket import Ticket
from services.notification_service import NotificationService
from services.qr_service import QrService
from utils.error_handling import ConfigurationError, NotificationFailed

PAYLOAD = '{"id":"t-1","signature":"1a2b"}'


@pytest.fixture
def ticket():
    return Ticket(id="t-1", name="Ada", email="ada@example.com", issued_by="org")


class TestQrService:
    def test_url_encodes_payload_like_uri_component(self):
        url = QrService().image_url(PAYLOAD)
        assert url == (
            "https://api.qrserver.com/v1/create-qr-code/?size=150x150&data="
            "%7B%22id%22%3A%22t-1%22%2C%22signature%22%3A%221a2b%22%7D"
        )

    def test_payload_round_trips_through_url(self):
        url = QrService("https://qr.example/render").image_url(PAYLOAD, size=300)
        assert url.startswith("https://qr.example/render?size=300x300&data=")
        assert unquote(url.split("data=", 1)[1]) == PAYLOAD


class TestNotificationService:
    def test_compose(self, ticket):
        service = NotificationService("tickets@example.com", "2025 Global Summit", client=MagicMock())
        message = service.compose(ticket, PAYLOAD)
        assert message["subject"] == "Your Ticket: 2025 Global Summit"
        assert message["body"].startswith("Hello Ada,\n\nHere is your ticket.")
        assert "size=300x300" in message["body"]

    def test_send_ticket_calls_ses(self, ticket):
        client = MagicMock()
        client.send_email.return_value = {"MessageId": "msg-1"}
        service = NotificationService("tickets@example.com", "Summit", client=client)

        assert service.send_ticket(ticket, PAYLOAD) == "msg-1"
        kwargs = client.send_email.call_args.kwargs
        assert kwargs["Source"] == "tickets@example.com"
        assert kwargs["Destination"] == {"ToAddresses": ["ada@example.com"]}
        assert kwargs["Message"]["Subject"]["Data"] == "Your Ticket: Summit"

    def test_missing_sender_is_configuration_error(self, ticket):
        client = MagicMock()
        service = NotificationService("", "Summit", client=client)
        with pytest.raises(ConfigurationError):
            service.send_ticket(ticket, PAYLOAD)
        client.send_email.assert_not_called()

    def test_ses_failure_raises_notification_failed(self, ticket):
        client = MagicMock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "no"}}, "SendEmail"
        )
        service = NotificationService("tickets@example.com", "Summit", client=client)
        with pytest.raises(NotificationFailed):
            service.send_ticket(ticket, PAYLOAD)
