"""Outbound mail adapter."""

from .client import InMemoryMailer, SentMessage, SmtpMailer

__all__ = ["InMemoryMailer", "SentMessage", "SmtpMailer"]
