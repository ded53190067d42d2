"""Outbound mail adapter."""

from .sender import MockEmailSender, SMTPEmailSender, SMTPSender

__all__ = ["SMTPSender", "SMTPEmailSender", "MockEmailSender"]
