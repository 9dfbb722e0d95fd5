"""
Bounded in-memory activity log.

Keeps the most recent log entries for the /logs endpoint. Oldest entries
are dropped first once capacity is reached.
"""

from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any

from lead_inbox.core.models import LogEntry

DEFAULT_CAPACITY = 100

# Keys structlog adds itself; they are not part of the readable message.
_RESERVED_KEYS = {"event", "timestamp", "level", "logger", "exc_info", "stack_info"}


class ActivityLog:
    """Ring of the most recent LogEntry records."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._total = 0
        self._lock = Lock()

    def record(self, message: str, timestamp: str | None = None) -> LogEntry:
        """Append an entry, evicting the oldest one when full."""
        entry = LogEntry(
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            message=message,
        )
        with self._lock:
            self._entries.append(entry)
            self._total += 1
        return entry

    def recent(self, limit: int | None = None) -> list[LogEntry]:
        """Return up to `limit` newest entries, oldest first."""
        with self._lock:
            entries = list(self._entries)
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    @property
    def total(self) -> int:
        """Number of entries ever recorded, including evicted ones."""
        return self._total

    def __len__(self) -> int:
        return len(self._entries)

    def __call__(self, logger: Any, method_name: str, event_dict: dict) -> dict:
        """structlog processor: record the event and pass it through unchanged."""
        self.record(format_event(event_dict), timestamp=event_dict.get("timestamp"))
        return event_dict


def format_event(event_dict: dict) -> str:
    """Render a structlog event as 'event key=value ...'."""
    parts = [str(event_dict.get("event", ""))]
    for key, value in event_dict.items():
        if key in _RESERVED_KEYS:
            continue
        parts.append(f"{key}={value}")
    return " ".join(parts)
