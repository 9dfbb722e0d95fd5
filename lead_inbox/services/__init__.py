"""External service gateways (mailbox and inference)."""

from .base import InferenceGateway, MailboxGateway

__all__ = ["InferenceGateway", "MailboxGateway"]
