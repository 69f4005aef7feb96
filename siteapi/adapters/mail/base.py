from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MailMessage:
    to: str
    sender: str
    subject: str
    body: str
    reply_to: str | None = None


class AbstractMailer(ABC):
    """Outgoing mail collaborator."""

    @abstractmethod
    def send(self, message: MailMessage) -> bool:
        """Hand a message to the transport.

        Returns:
            True if the transport accepted the message, False otherwise.
        """
        ...
