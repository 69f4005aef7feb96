"""Outgoing mail adapters."""

from siteapi.adapters.mail.base import AbstractMailer, MailMessage
from siteapi.adapters.mail.logging_mailer import LoggingMailer

__all__ = ["AbstractMailer", "LoggingMailer", "MailMessage"]
