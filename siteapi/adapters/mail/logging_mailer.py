"""Mailer that records messages instead of delivering them.

Used as the default transport: messages land in ``outbox`` and are logged
without their body.
"""

from __future__ import annotations

import logging
import threading

from siteapi.adapters.mail.base import AbstractMailer, MailMessage

logger = logging.getLogger(__name__)


class LoggingMailer(AbstractMailer):
    def __init__(self, *, max_outbox: int = 1000) -> None:
        self._lock = threading.Lock()
        self._max_outbox = max_outbox
        self.outbox: list[MailMessage] = []

    def send(self, message: MailMessage) -> bool:
        with self._lock:
            self.outbox.append(message)
            del self.outbox[: max(0, len(self.outbox) - self._max_outbox)]

        logger.info(
            "mail.recorded",
            extra={
                "mail_to": message.to,
                "mail_from": message.sender,
                "mail_subject": message.subject,
            },
        )
        return True
