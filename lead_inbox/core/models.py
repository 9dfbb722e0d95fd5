"""
Data models for email processing.

Uses dataclasses for clean, typed data structures. Values coming back from
the mailbox and inference providers are validated here, at construction.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Minimum confidence (exclusive) for a positive verdict to route as a lead.
LEAD_CONFIDENCE_THRESHOLD = 0.6


class Label(str, Enum):
    """Routing labels applied to processed messages."""

    LEAD = "lead"
    OTHER = "other"


@dataclass(frozen=True)
class InboundMessage:
    """Decoded inbound email."""

    id: str
    thread_id: str = ""
    subject: str = ""
    sender: str = ""
    recipient: str = ""
    body: str = ""


@dataclass(frozen=True)
class ClassificationVerdict:
    """Lead/not-lead judgement for one message."""

    is_lead: bool
    confidence: float
    reason: str = ""
    keywords: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))

    @classmethod
    def fallback(cls) -> "ClassificationVerdict":
        """Safe verdict used whenever classification fails."""
        return cls(is_lead=False, confidence=0.0, reason="analysis failed", keywords=())

    @classmethod
    def from_dict(cls, data: Any) -> "ClassificationVerdict":
        """
        Create a verdict from the classifier's JSON response.

        Raises:
            ValueError: If the response does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        is_lead = data.get("isLead")
        if not isinstance(is_lead, bool):
            raise ValueError(f"isLead must be a boolean, got {is_lead!r}")

        confidence = data.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise ValueError(f"confidence must be a number, got {confidence!r}")
        if math.isnan(confidence):
            raise ValueError("confidence must not be NaN")

        reason = data.get("reason") or ""
        keywords = data.get("keywords") or []
        if not isinstance(keywords, list):
            raise ValueError(f"keywords must be a list, got {type(keywords).__name__}")

        return cls(
            is_lead=is_lead,
            confidence=float(confidence),
            reason=str(reason),
            keywords=tuple(str(k) for k in keywords),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "isLead": self.is_lead,
            "confidence": self.confidence,
            "reason": self.reason,
            "keywords": list(self.keywords),
        }


def clamp_confidence(value: float) -> float:
    """Clamp a confidence score into [0, 1]."""
    return min(1.0, max(0.0, float(value)))


def is_effective_lead(verdict: ClassificationVerdict) -> bool:
    """A verdict routes as a lead only when positive AND confidence > threshold."""
    return verdict.is_lead and verdict.confidence > LEAD_CONFIDENCE_THRESHOLD


def label_for(verdict: ClassificationVerdict) -> Label:
    """Pick the routing label for a verdict."""
    return Label.LEAD if is_effective_lead(verdict) else Label.OTHER


@dataclass
class LogEntry:
    """One entry in the activity log."""

    timestamp: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"timestamp": self.timestamp, "message": self.message}


@dataclass
class ProcessingResult:
    """Result from processing one message."""

    success: bool
    message_id: str
    sender: str = ""
    subject: str = ""
    is_lead: bool = False
    confidence: float = 0.0
    label: str | None = None
    label_applied: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, message_id: str, error: str) -> "ProcessingResult":
        return cls(success=False, message_id=message_id, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served over HTTP."""
        if not self.success:
            return {"success": False, "messageId": self.message_id, "error": self.error}
        return {
            "success": True,
            "messageId": self.message_id,
            "from": self.sender,
            "subject": self.subject,
            "isLead": self.is_lead,
            "confidence": self.confidence,
            "label": self.label,
            "labelApplied": self.label_applied,
        }


@dataclass
class CycleReport:
    """Aggregate of one polling cycle."""

    processed_count: int = 0
    results: list[ProcessingResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "processedCount": self.processed_count,
            "results": [r.to_dict() for r in self.results],
        }
