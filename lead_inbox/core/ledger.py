"""
Processing ledger: ids of messages already handled by this process.

Append-only, in-memory, no eviction. A restarted process starts empty and
will see still-unread messages again.
"""

from threading import Lock
from typing import Iterable


class ProcessingLedger:
    """Set of processed message ids, safe to share across threads."""

    def __init__(self, message_ids: Iterable[str] = ()):
        self._ids: set[str] = set(message_ids)
        self._lock = Lock()

    def add(self, message_id: str) -> None:
        with self._lock:
            self._ids.add(message_id)

    def unseen(self, message_ids: Iterable[str]) -> list[str]:
        """Filter `message_ids` down to those not yet recorded, keeping order."""
        with self._lock:
            return [mid for mid in message_ids if mid not in self._ids]

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)

    def __contains__(self, message_id: object) -> bool:
        with self._lock:
            return message_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
