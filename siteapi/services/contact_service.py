"""Contact relay: forward a message from one site user to another by mail."""

from __future__ import annotations

import html
import logging
from typing import Any

from siteapi.adapters.content.base import AbstractContentRepository, User
from siteapi.adapters.mail.base import AbstractMailer, MailMessage
from siteapi.core.errors import DeliveryAppError, NotFoundAppError, ValidationAppError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("subject", "message", "recipient")


class ContactRelayService:
    """Validate a contact submission and relay it through the mailer."""

    def __init__(self, repository: AbstractContentRepository, mailer: AbstractMailer) -> None:
        self._repository = repository
        self._mailer = mailer

    def submit(self, payload: Any, sender: User | None) -> None:
        """Send the message to the recipient and optionally a copy to the sender.

        Subject and message are HTML-escaped before sending. A copy is sent
        only when ``send_copy`` is literally ``true``.

        Raises:
            ValidationAppError: Missing subject, message or recipient (400).
            NotFoundAppError: Unknown recipient (404).
            DeliveryAppError: Recipient or sender has no email, or the mailer
                rejected a message (500).
        """
        if not isinstance(payload, dict) or any(not payload.get(f) for f in REQUIRED_FIELDS):
            raise ValidationAppError(
                code="missing_fields",
                message="Missing required fields: subject, message, or recipient.",
            )

        recipient = self._load_recipient(payload["recipient"])
        if not recipient.email:
            logger.error("contact.failed", extra={"reason": "recipient_without_email", "uid": recipient.uid})
            raise DeliveryAppError(
                code="recipient_without_email",
                message="Recipient does not have a valid email address.",
            )

        if sender is None or not sender.email:
            logger.error("contact.failed", extra={"reason": "sender_without_email"})
            raise DeliveryAppError(
                code="sender_without_email",
                message="Sender does not have a valid email address.",
            )

        subject = html.escape(str(payload["subject"]))
        body = html.escape(str(payload["message"]))

        logger.info(
            "contact.sending",
            extra={"mail_to": recipient.email, "mail_from": sender.email, "mail_subject": subject},
        )

        message = MailMessage(to=recipient.email, sender=sender.email, subject=subject, body=body, reply_to=sender.email)
        if not self._mailer.send(message):
            logger.error("contact.failed", extra={"reason": "send_failed", "mail_to": recipient.email})
            raise DeliveryAppError(code="send_failed", message="Failed to send the email.")

        if payload.get("send_copy") is True:
            copy_message = MailMessage(to=sender.email, sender=sender.email, subject=subject, body=body)
            if not self._mailer.send(copy_message):
                logger.error("contact.failed", extra={"reason": "copy_failed", "mail_to": sender.email})
                raise DeliveryAppError(code="copy_failed", message="Failed to send the copy to the sender.")

    def _load_recipient(self, raw_uid: Any) -> User:
        try:
            uid = int(raw_uid)
        except (TypeError, ValueError):
            uid = None
        recipient = self._repository.get_user(uid) if uid is not None else None
        if recipient is None:
            raise NotFoundAppError(code="recipient_not_found", message="Recipient user not found.")
        return recipient
