"""Tests for the contact relay endpoint."""

import pytest
from fastapi.testclient import TestClient

from siteapi.adapters.mail.base import AbstractMailer, MailMessage
from siteapi.core.errors import DeliveryAppError
from siteapi.services.contact_service import ContactRelayService

URL = "/api/contact"
SENDER = {"X-User-Id": "1"}


def _payload(**overrides):
    payload = {"subject": "Hello", "message": "Hi there", "recipient": 2}
    payload.update(overrides)
    return payload


class RejectingMailer(AbstractMailer):
    def __init__(self, accept: int = 0) -> None:
        self.accept = accept
        self.sent: list[MailMessage] = []

    def send(self, message: MailMessage) -> bool:
        if len(self.sent) >= self.accept:
            return False
        self.sent.append(message)
        return True


def test_message_is_relayed_to_recipient(client: TestClient, container) -> None:
    resp = client.post(URL, json=_payload(), headers=SENDER)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Contact form submitted and email sent successfully."}
    [message] = container.mailer.outbox
    assert message.to == "editor@example.com"
    assert message.sender == "admin@example.com"
    assert message.reply_to == "admin@example.com"
    assert message.subject == "Hello"


def test_copy_sent_only_when_send_copy_is_true(client: TestClient, container) -> None:
    client.post(URL, json=_payload(send_copy="true"), headers=SENDER)
    assert len(container.mailer.outbox) == 1

    client.post(URL, json=_payload(send_copy=True), headers=SENDER)
    assert [m.to for m in container.mailer.outbox[1:]] == ["editor@example.com", "admin@example.com"]


def test_subject_and_message_are_html_escaped(client: TestClient, container) -> None:
    client.post(URL, json=_payload(subject="<b>Hi</b>", message="a & b <script>"), headers=SENDER)

    [message] = container.mailer.outbox
    assert message.subject == "&lt;b&gt;Hi&lt;/b&gt;"
    assert message.body == "a &amp; b &lt;script&gt;"


@pytest.mark.parametrize("missing", ["subject", "message", "recipient"])
def test_missing_field_returns_400(client: TestClient, missing: str) -> None:
    payload = _payload()
    del payload[missing]

    resp = client.post(URL, json=payload, headers=SENDER)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "missing_fields"


@pytest.mark.parametrize("recipient", [999, "nobody"])
def test_unknown_recipient_returns_404(client: TestClient, recipient) -> None:
    resp = client.post(URL, json=_payload(recipient=recipient), headers=SENDER)

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "recipient_not_found"


def test_recipient_without_email_returns_500(client: TestClient, container) -> None:
    resp = client.post(URL, json=_payload(recipient=3), headers=SENDER)

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "recipient_without_email"
    assert container.mailer.outbox == []


@pytest.mark.parametrize("headers", [{}, {"X-User-Id": "3"}, {"X-User-Id": "abc"}])
def test_sender_without_email_returns_500(client: TestClient, headers) -> None:
    resp = client.post(URL, json=_payload(), headers=headers)

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "sender_without_email"


def test_failed_send_raises(content) -> None:
    service = ContactRelayService(content, RejectingMailer(accept=0))

    with pytest.raises(DeliveryAppError) as exc_info:
        service.submit(_payload(), content.get_user(1))

    assert exc_info.value.code == "send_failed"
    assert exc_info.value.message == "Failed to send the email."


def test_failed_copy_raises_after_main_message(content) -> None:
    mailer = RejectingMailer(accept=1)
    service = ContactRelayService(content, mailer)

    with pytest.raises(DeliveryAppError) as exc_info:
        service.submit(_payload(send_copy=True), content.get_user(1))

    assert exc_info.value.code == "copy_failed"
    assert [m.to for m in mailer.sent] == ["editor@example.com"]
