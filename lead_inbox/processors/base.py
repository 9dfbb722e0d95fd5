"""
Abstract base class for email processors.
"""

from abc import ABC, abstractmethod

from lead_inbox.core.models import CycleReport


class BaseProcessor(ABC):
    """Abstract processor interface for email processing pipelines."""

    @abstractmethod
    def run_cycle(self) -> CycleReport:
        """
        Run one processing pass over the mailbox.

        Returns:
            CycleReport with one result per processed message
        """
        pass
