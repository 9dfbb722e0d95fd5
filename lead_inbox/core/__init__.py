"""Core modules for email processing."""

from .logging import configure_logging, get_logger
from .models import (
    InboundMessage,
    ClassificationVerdict,
    Label,
    LogEntry,
    ProcessingResult,
    CycleReport,
    is_effective_lead,
    label_for,
)
from .activity import ActivityLog
from .decoder import decode_message
from .ledger import ProcessingLedger

__all__ = [
    "configure_logging",
    "get_logger",
    "InboundMessage",
    "ClassificationVerdict",
    "Label",
    "LogEntry",
    "ProcessingResult",
    "CycleReport",
    "is_effective_lead",
    "label_for",
    "ActivityLog",
    "decode_message",
    "ProcessingLedger",
]
